# Supabase tables: equipment_requests, printing_requests, room_requests (shared approval columns)
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Columns shared by every request table:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null)
- user_name: text (not null)
- class_id: uuid (foreign key to classes.id, nullable)
- class_name: text (not null)
- date: date (not null)
- notes: text (nullable)
- signature: text (nullable)
- status: text (not null, default: 'pending') - values: pending, approved, rejected, cancelled
- supervisor_approval_timestamp: timestamp (nullable)
- supervisor_approval_user_id: uuid (nullable)
- supervisor_approval_user_name: text (nullable)
- supervisor_approval_notes: text (nullable)
- admin_approval_timestamp: timestamp (nullable)
- admin_approval_user_id: uuid (nullable)
- admin_approval_user_name: text (nullable)
- admin_approval_notes: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

Remote procedure:
- update_request_status(request_id uuid, request_type text, new_status text,
  approver_id uuid, approver_name text, approval_notes text default null)
  request_type is one of 'equipment', 'printing', 'room'. Sets status on the
  matching table and stamps the approval columns of the approver's role.
"""

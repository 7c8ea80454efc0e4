# Supabase table: reservations
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null)
- room_id: uuid (foreign key to rooms.id, nullable)
- equipment_id: uuid (foreign key to equipment.id, nullable)
- equipment_quantity: integer (nullable)
- class_id: uuid (nullable)
- class_name: text (nullable)
- start_time: timestamp (not null)
- end_time: timestamp (not null)
- participants: integer (nullable)
- purpose: text (nullable)
- requires_commander_approval: boolean (nullable)
- status: request_status enum (not null, default: 'pending') - values: pending, approved, rejected, cancelled
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""

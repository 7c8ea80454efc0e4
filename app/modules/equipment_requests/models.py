# Supabase table: equipment_requests
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Approval columns are shared with the other request tables, see approvals/models.py

"""
Expected Supabase table structure (in addition to the shared request columns):
- equipment_id: uuid (foreign key to equipment.id, nullable)
- equipment_name: text (not null)
- equipment_quantity: integer (not null)
- return_timestamp: timestamp (nullable)
- return_user_id: uuid (nullable)
- return_user_name: text (nullable)
- return_notes: text (nullable)
"""

# Supabase table: room_requests
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Approval columns are shared with the other request tables, see approvals/models.py

"""
Expected Supabase table structure (in addition to the shared request columns):
- room_id: uuid (foreign key to rooms.id, nullable)
- room_name: text (not null)
- start_time: text (not null) - "HH:MM" on the request date
- end_time: text (not null) - "HH:MM" on the request date
- participants: integer (nullable)
- requires_commander_approval: boolean (nullable)
"""

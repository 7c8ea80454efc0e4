# Supabase table: equipment
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- name: text (not null)
- description: text (nullable)
- category: text (nullable)
- location: text (nullable)
- total_quantity: integer (not null)
- available_quantity: integer (not null)
- requires_clearance: boolean (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

Remote procedure:
- return_equipment(equipment_id uuid, quantity integer) - adds quantity back to
  available_quantity, capped at total_quantity
"""

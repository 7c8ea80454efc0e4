# Supabase table: rooms
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- name: text (not null)
- type: room_type enum (not null) - values: classroom, training_room, weapons_room,
  tactical_room, computer_lab, science_lab, meeting_room
- capacity: integer (not null)
- building: text (nullable)
- floor: text (nullable)
- description: text (nullable)
- equipment: text[] (nullable) - fixed equipment installed in the room
- software: text[] (nullable)
- is_available: boolean (nullable, default: true)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""

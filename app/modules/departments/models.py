# Supabase table: departments
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- name: text (not null)
- description: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
"""

# Supabase tables: profiles, teacher_classes, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- full_name: text (nullable)
- avatar_url: text (nullable)
- role: user_role enum (not null, default: 'teacher') - values: admin, supervisor, teacher
- department: text (nullable)
- unit: text (nullable)
- rank: text (nullable)
- clearance_level: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

teacher_classes:
- id: uuid (primary key)
- teacher_id: uuid (references profiles.id)
- class_id: uuid (references classes.id)
- created_at: timestamp (default: now())

Note: Authentication data (email, password, tokens) is stored in auth.users
managed by Supabase Auth. This table only stores profile information.
"""

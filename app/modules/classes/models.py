# Supabase tables: classes, teacher_classes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

classes:
- id: uuid (primary key)
- name: text (not null)
- department_id: uuid (foreign key to departments.id, nullable)
- student_count: integer (not null, default: 0)
- unit: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())

teacher_classes (join table, managed from the users module):
- id: uuid (primary key)
- teacher_id: uuid (foreign key to profiles.id, not null)
- class_id: uuid (foreign key to classes.id, not null)
- created_at: timestamp (default: now())
"""

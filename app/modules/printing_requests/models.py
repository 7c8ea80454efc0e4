# Supabase table: printing_requests
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Approval columns are shared with the other request tables, see approvals/models.py

"""
Expected Supabase table structure (in addition to the shared request columns):
- document_name: text (not null)
- page_count: integer (not null)
- copies: integer (not null)
- color_print: boolean (nullable)
- double_sided: boolean (nullable)
- pdf_file_name: text (nullable) - object name of the uploaded PDF in storage
"""

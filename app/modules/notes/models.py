# Supabase table: notes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (foreign key to auth.users.id, not null)
- title: text (not null)
- content: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now()) - listing is ordered by this column
"""

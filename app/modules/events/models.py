# Supabase table: events
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key, default: gen_random_uuid())
- user_id: uuid (foreign key to auth.users.id, not null)
- title: text (not null)
- description: text (nullable)
- date: date or timestamptz (not null)
- location: text (nullable)
- type: text (nullable) - free-form category, e.g. "anniversary", "trip"
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""

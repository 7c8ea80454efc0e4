# Supabase Auth: auth.users, plus the public.profiles row created for each account
# No application tables live in this module

"""
Account lifecycle:
- auth.sign_up() stores role='teacher' and full_name in user_metadata
- a trigger on auth.users inserts the profiles row from that metadata
- auth.get_user(jwt) resolves a bearer token to the account on every request
- profiles.role (admin, supervisor, teacher) decides permissions; app_metadata is not used
- deleting a user removes the profiles row first, then auth.admin.delete_user()
  with the service_role key
"""

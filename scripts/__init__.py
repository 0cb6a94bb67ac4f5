"""
Utility Scripts.

- setup_supabase.py: SQL for the key-value table, and a reachability check

Run scripts with: python -m scripts.<script_name>
"""

"""
Listing Store.

Responsibilities:
- Define the truck listing schema posted by drivers.
- Keep listings in memory, seeded from the bundled demo CSV.
- Provide paginated search plus owner-scoped update and delete.
"""

"""Users app package.

Accounts acting on the platform (students, homeowners, admins) with
their active/deactivated status, an in-memory repository and the
admin service used to deactivate accounts.
"""

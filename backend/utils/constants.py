"""
Shared constants for routes, pagination and invoice status values.

Paths are referenced by the authorization predicate, the mutation handlers
(redirect and cache-invalidation targets) and the templates, so they live in
one place.
"""

# Area that requires an authenticated principal
PROTECTED_PREFIX = '/dashboard'

# Default landing page for a logged-in user
DASHBOARD_PATH = '/dashboard'

# Invoice list; target of post-mutation redirects and cache invalidation
INVOICES_PATH = '/dashboard/invoices'

# Sign-in page (unauthenticated requests to the protected area land here)
LOGIN_PATH = '/auth/login'

# Allowed values for invoices.status
INVOICE_STATUSES = ('pending', 'paid')

# Rows per page on the invoice list
ITEMS_PER_PAGE = 6

# Rows on the dashboard "latest invoices" card
LATEST_INVOICES_LIMIT = 5

# invoices.amount is a Postgres integer (cents)
MAX_INVOICE_AMOUNT_CENTS = 2147483647

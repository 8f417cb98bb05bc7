"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. These names are shared with the web
client, so they keep its spelling (``client_db``, ``booking``, ``request``).
"""

# Inventory and customers
COLLECTION_PRODUCTS = "products"
COLLECTION_CLIENTS = "client_db"
COLLECTION_COMPANIES = "companies"
COLLECTION_USERS = "iboard_users"

# Sales documents
COLLECTION_QUOTATIONS = "quotations"
COLLECTION_COST_ESTIMATES = "cost_estimates"
COLLECTION_BOOKINGS = "booking"

# Logistics
COLLECTION_JOB_ORDERS = "job_orders"
COLLECTION_SERVICE_ASSIGNMENTS = "service_assignments"
COLLECTION_REPORTS = "reports"
COLLECTION_SCREEN_SCHEDULES = "screen_schedule"

# Finance and treasury
COLLECTION_COLLECTIBLES = "collectibles"
COLLECTION_FINANCE_REQUESTS = "request"
COLLECTION_PETTY_CASH_CONFIG = "petty_cash_config"
COLLECTION_PETTY_CASH_CYCLES = "petty_cash_cycles"
COLLECTION_PETTY_CASH_EXPENSES = "petty_cash_expenses"

# Outbound email log
COLLECTION_EMAILS = "emails"

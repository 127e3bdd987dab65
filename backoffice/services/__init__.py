"""
Service Layer - Business Logic

stock_ledger and order_aggregator are pure; inventory_service and
order_service wire them to the repositories.
"""

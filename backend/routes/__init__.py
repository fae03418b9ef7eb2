"""
FastAPI routers for the dashboard.

Each module defines a router for one area (auth, dashboard, invoices, health).
Page routes render Jinja2 templates; form actions map handler result variants
to redirects or re-rendered forms.
"""

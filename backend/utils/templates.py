"""
Jinja2 environment for the server-rendered pages.

Display filters convert stored values (cents, ISO dates) for humans; templates
never do arithmetic on amounts themselves.
"""

import os

from fastapi.templating import Jinja2Templates

from backend.utils.constants import DASHBOARD_PATH, INVOICES_PATH, LOGIN_PATH
from backend.utils.formatting import format_currency, format_date_to_local, generate_pagination

TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "templates")

templates = Jinja2Templates(directory=TEMPLATES_DIR)

templates.env.filters["currency"] = format_currency
templates.env.filters["local_date"] = format_date_to_local
templates.env.globals["generate_pagination"] = generate_pagination
templates.env.globals["DASHBOARD_PATH"] = DASHBOARD_PATH
templates.env.globals["INVOICES_PATH"] = INVOICES_PATH
templates.env.globals["LOGIN_PATH"] = LOGIN_PATH

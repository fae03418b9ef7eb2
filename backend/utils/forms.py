"""
Form submission helpers.
"""

from typing import Dict

from fastapi import Request


async def read_form_fields(request: Request) -> Dict[str, str]:
    """
    Read a urlencoded/multipart submission as string key/value pairs.

    File parts are dropped; only the first value of a repeated field is kept.
    """
    form = await request.form()
    fields: Dict[str, str] = {}
    for key, value in form.multi_items():
        if isinstance(value, str) and key not in fields:
            fields[key] = value
    return fields

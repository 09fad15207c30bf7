# server/core/utils.py

from fastapi import Request


async def read_payload(request: Request) -> dict:
    """
    Reads a request body sent either as JSON or as URL-encoded form data.
    Anything unreadable yields an empty dict so that field checks report
    the missing values.
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            data = await request.json()
        except ValueError:
            return {}
        return data if isinstance(data, dict) else {}

    form = await request.form()
    return {key: value for key, value in form.items()}

"""Helpers shared by listing endpoints."""

from fastapi import Request, Response

from ..pagination import PaginatedResponse, create_link_header


def add_link_header(request: Request, response: Response, page: PaginatedResponse) -> None:
    """Add an RFC 8288 ``rel="next"`` Link header when another page exists."""
    if not page.next_cursor:
        return

    base_url = str(request.url).split('?')[0]
    link_header = create_link_header(
        base_url=base_url,
        params=dict(request.query_params),
        next_cursor=page.next_cursor
    )
    if link_header:
        response.headers["Link"] = link_header

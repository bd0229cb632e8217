"""
Session Router - /v1/session Endpoints

Exposes the caller's own session values (under the facade's namespace)
over HTTP. The session is identified by the session cookie. Every endpoint
opens the request-scoped facade and closes it before responding, so a
failed write surfaces as an error response; the dependency's own close()
only covers handlers that exit early.

Endpoints:
- GET    /v1/session        all values in the namespace
- GET    /v1/session/{key}  one value (404 if absent)
- PUT    /v1/session/{key}  store a value
- DELETE /v1/session        destroy the whole session
"""

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from session_facade.api.deps import get_session
from session_facade.models.requests import SessionValueRequest
from session_facade.models.responses import SessionValueResponse, SessionValuesResponse
from session_facade.sessions.facade import SessionFacade


router = APIRouter(
    prefix="/v1/session",
    tags=["Session"],
)

_MISSING = object()


def _not_found(key: str, response: Response) -> JSONResponse:
    """404 body in HTTPException's shape, carrying any session cookie already set."""
    not_found = JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": f"Session key not found: {key}"},
    )
    not_found.raw_headers.extend(
        header for header in response.raw_headers if header[0] == b"set-cookie"
    )
    return not_found


@router.get("", response_model=SessionValuesResponse)
async def get_session_values(
    session: SessionFacade = Depends(get_session),
) -> SessionValuesResponse:
    """Return every value stored in the caller's session namespace."""
    await session.open()
    values = session.get_all()
    await session.close()
    return SessionValuesResponse(values=values)


@router.get(
    "/{key}",
    response_model=SessionValueResponse,
    responses={status.HTTP_404_NOT_FOUND: {"description": "Key not set"}},
)
async def get_session_value(
    key: str,
    response: Response,
    session: SessionFacade = Depends(get_session),
):
    """
    Return one value from the caller's session.

    A miss still saves the session and sends its cookie, so a session
    started by this request stays reachable.

    Returns:
        SessionValueResponse, or a 404 JSON response if the key was never set.
    """
    await session.open()
    value = session.get(key, _MISSING)
    await session.close()
    if value is _MISSING:
        return _not_found(key, response)
    return SessionValueResponse(key=key, value=value)


@router.put("/{key}", response_model=SessionValueResponse)
async def put_session_value(
    key: str,
    body: SessionValueRequest,
    session: SessionFacade = Depends(get_session),
) -> SessionValueResponse:
    """Store a value in the caller's session."""
    await session.open()
    session.set(key, body.value)
    await session.close()
    return SessionValueResponse(key=key, value=body.value)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def destroy_session(
    session: SessionFacade = Depends(get_session),
) -> None:
    """Erase the caller's session, across every namespace, and expire its cookie."""
    await session.destroy()

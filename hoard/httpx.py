from hoard._integrations._httpx import from_httpx, to_httpx

__all__ = ("from_httpx", "to_httpx")

"""Run the Chlorpromazine server locally.

The transport comes from the ``TRANSPORT`` setting: ``http`` serves the
FastAPI app through uvicorn, ``stdio`` hands control to FastMCP.
"""

from __future__ import annotations


def main() -> None:
    from chlorpromazine.core.config import get_settings

    settings = get_settings()
    if settings.transport == "stdio":
        from chlorpromazine.mcp.server import run_stdio

        run_stdio()
        return

    import uvicorn

    from chlorpromazine.main import app

    reload_enabled = settings.app_env == "development"
    if reload_enabled:
        uvicorn.run(
            "chlorpromazine.main:app",
            host=settings.server_host,
            port=settings.server_port,
            reload=True,
        )
    else:
        uvicorn.run(
            app,
            host=settings.server_host,
            port=settings.server_port,
            reload=False,
        )


if __name__ == "__main__":
    main()

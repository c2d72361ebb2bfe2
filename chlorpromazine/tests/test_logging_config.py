from chlorpromazine.core import logging_config


def test_secret_fields_are_redacted():
    event = {"event": "startup", "api_key": "s3cret", "serpapi_key": None, "caller": "stdio"}

    redacted = logging_config._redact_secrets(None, "info", event)

    assert redacted["api_key"] == logging_config.REDACTED
    assert redacted["serpapi_key"] is None
    assert redacted["caller"] == "stdio"


def test_line_renderer_skips_empty_fields():
    line = logging_config._render_line(
        None,
        "info",
        {
            "timestamp": "2026-01-01T00:00:00Z",
            "level": "info",
            "event": "mcp_dispatch",
            "method": "tools/list",
            "error_kind": None,
        },
    )

    assert line == "2026-01-01T00:00:00Z [INFO] mcp_dispatch method=tools/list"

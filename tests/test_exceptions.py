from scriptgate.core.exceptions import (
    ConfigurationError,
    EvaluationError,
    HostIntegrationError,
    ScriptGateError,
)


def test_to_json_error_payload():
    err = HostIntegrationError("Host failed", handle="widget-js", operation="activate")

    assert err.to_json_error() == {
        "message": "Host failed",
        "code": "HostIntegrationError",
        "context": {"handle": "widget-js", "operation": "activate"},
    }


def test_error_hierarchy():
    assert issubclass(ConfigurationError, ValueError)
    assert issubclass(HostIntegrationError, RuntimeError)
    for cls in (ConfigurationError, EvaluationError, HostIntegrationError):
        assert issubclass(cls, ScriptGateError)


def test_context_is_copied():
    ctx = {"path": "a.yaml"}
    err = ConfigurationError("bad", context=ctx)
    ctx["path"] = "b.yaml"
    assert err.to_json_error()["context"] == {"path": "a.yaml"}

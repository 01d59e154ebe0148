"""Tests for the protocol error taxonomy."""

import pytest

from zinc.protocols.errors import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    PARSE_ERROR,
    TOOL_NOT_FOUND,
    FrameTooLargeError,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MethodNotFoundError,
    ParseError,
    ProtocolError,
    ToolExecutionError,
    ToolNotFoundError,
    TransportError,
)


class TestErrorHierarchy:
    @pytest.mark.parametrize(
        "cls",
        [
            ParseError,
            InvalidRequestError,
            MethodNotFoundError,
            InvalidParamsError,
            InternalError,
            ToolNotFoundError,
            ToolExecutionError,
        ],
    )
    def test_is_protocol_error(self, cls: type) -> None:
        assert issubclass(cls, ProtocolError)

    def test_tool_execution_error_is_internal_error(self) -> None:
        assert issubclass(ToolExecutionError, InternalError)

    def test_transport_error_is_not_protocol_error(self) -> None:
        assert not issubclass(TransportError, ProtocolError)

    def test_frame_too_large_is_invalid_request(self) -> None:
        exc = FrameTooLargeError(1024)
        assert isinstance(exc, InvalidRequestError)
        assert exc.limit == 1024
        assert exc.to_error().model_dump(exclude_none=True) == {
            "code": -32600,
            "message": "Invalid request: frame exceeds 1024 bytes",
        }


class TestCodes:
    def test_standard_codes(self) -> None:
        assert ParseError().code == PARSE_ERROR == -32700
        assert InvalidRequestError().code == INVALID_REQUEST == -32600
        assert MethodNotFoundError("x").code == METHOD_NOT_FOUND == -32601
        assert InvalidParamsError("bad").code == INVALID_PARAMS == -32602
        assert InternalError().code == INTERNAL_ERROR == -32603

    def test_tool_not_found_has_own_code(self) -> None:
        assert ToolNotFoundError("x").code == TOOL_NOT_FOUND
        assert TOOL_NOT_FOUND != INTERNAL_ERROR
        assert -32099 <= TOOL_NOT_FOUND <= -32000

    def test_tool_execution_uses_internal_code(self) -> None:
        assert ToolExecutionError("read_file", "Failed to read file: nope").code == INTERNAL_ERROR


class TestMessages:
    def test_method_not_found_names_method(self) -> None:
        err = MethodNotFoundError("tools/explode")
        assert err.method == "tools/explode"
        assert "tools/explode" in err.message

    def test_invalid_params_names_field(self) -> None:
        err = InvalidParamsError("path: Field required", field="path")
        assert err.field == "path"
        assert err.data == {"field": "path"}
        assert "path" in str(err)

    def test_invalid_params_without_field(self) -> None:
        err = InvalidParamsError("bad")
        assert err.data is None

    def test_tool_not_found_data(self) -> None:
        err = ToolNotFoundError("Read_File")
        assert err.name == "Read_File"
        assert err.data == {"tool": "Read_File"}
        assert "Read_File" in str(err)

    def test_tool_execution_detail_is_message(self) -> None:
        err = ToolExecutionError("read_file", "Failed to read file: missing")
        assert err.name == "read_file"
        assert err.message == "Failed to read file: missing"

    def test_tool_execution_without_detail(self) -> None:
        err = ToolExecutionError("run_command")
        assert "run_command" in err.message

    def test_parse_error_detail(self) -> None:
        assert ParseError("Expecting value").message == "Parse error: Expecting value"
        assert ParseError().message == "Parse error"


class TestToError:
    def test_converts_to_wire_error(self) -> None:
        wire = ToolNotFoundError("nope").to_error()
        assert wire.code == TOOL_NOT_FOUND
        assert wire.message == "Tool not found: nope"
        assert wire.data == {"tool": "nope"}

# =============================
# backend/app/mcp/models.py
# =============================
from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List, Literal


class ToolDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str
    description: str
    input_schema: Dict[str, Any] = Field(alias="inputSchema")


class Message(BaseModel):
    role: str  # system|user|assistant
    content: str


class ToolCallRequest(BaseModel):
    # shapes are checked by the dispatcher so both paths report them the same way
    name: Any = None
    arguments: Any = None


class TextContent(BaseModel):
    type: Literal["text"] = "text"
    text: str


class ToolCallResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    content: List[TextContent]
    is_error: bool = Field(default=False, alias="isError")

    @classmethod
    def text(cls, text: str, is_error: bool = False) -> "ToolCallResult":
        return cls(content=[TextContent(text=text)], is_error=is_error)

    def dump(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


RequestId = Any  # str | int | None per JSON-RPC; echoed back untouched


class JsonRpcError(BaseModel):
    code: int
    message: str


class JsonRpcResponse(BaseModel):
    jsonrpc: Literal["2.0"] = "2.0"
    result: Any | None = None
    error: JsonRpcError | None = None
    id: RequestId = None

    def dump(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"jsonrpc": self.jsonrpc}
        if self.error is not None:
            out["error"] = self.error.model_dump()
        else:
            out["result"] = self.result
        out["id"] = self.id
        return out


def rpc_result(result: Any, req_id: RequestId = None) -> Dict[str, Any]:
    return JsonRpcResponse(result=result, id=req_id).dump()


def rpc_error(code: int, message: str, req_id: RequestId = None) -> Dict[str, Any]:
    return JsonRpcResponse(error=JsonRpcError(code=code, message=message), id=req_id).dump()

import json
from fastapi import FastAPI, HTTPException
from fastapi.responses import JSONResponse
from typing import Any, Dict, List, Optional

from config_loader import get_config
from .dataset import load_channel_dataset
from .errors import DatasetError
from .tools import TOOLS, handle_tool_call

app = FastAPI(title=get_config().gateway_title)


def _configured_videos() -> Optional[List[Dict[str, Any]]]:
    """Videos from the configured dataset file, or None if it cannot be read."""
    try:
        return load_channel_dataset(get_config().dataset_path).videos
    except DatasetError:
        return None


def _text_result(call_id: Any, payload: Dict[str, Any], is_error: bool = False) -> Dict[str, Any]:
    result: Dict[str, Any] = {"content": [{"type": "text", "text": json.dumps(payload, ensure_ascii=False)}]}
    if is_error:
        result["isError"] = True
    return {"jsonrpc": "2.0", "id": call_id, "result": result}


@app.post("/", response_class=JSONResponse)
async def json_rpc_gateway(payload: Dict[str, Any]):
    method = payload.get("method")
    call_id = payload.get("id")
    if not method:
        raise HTTPException(status_code=400, detail="Missing method")

    if method == "tools/list":
        return {"jsonrpc": "2.0", "id": call_id, "result": {"tools": TOOLS}}

    if method == "tools/call":
        params = payload.get("params") or {}
        tool_name = params.get("name")
        args = params.get("arguments") or {}

        # Callers may send the dataset with each call; otherwise use the configured file
        videos = params.get("videos")
        if videos is None:
            videos = _configured_videos()
            if videos is None:
                return _text_result(
                    call_id, {"error": "No channel dataset available. Send 'videos' with the call."}, is_error=True
                )

        result, is_error = handle_tool_call(tool_name, args, videos)
        return _text_result(call_id, result, is_error=is_error)

    raise HTTPException(status_code=400, detail="Unsupported method")

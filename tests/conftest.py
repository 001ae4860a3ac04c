import pytest
from fastapi import FastAPI, HTTPException, Request, Response
from httpx import ASGITransport, AsyncClient
from pydantic import BaseModel

from jsonfetch.client import RequestClient


class ItemCreate(BaseModel):
    name: str


def create_app() -> FastAPI:
    app = FastAPI(title="jsonfetch-test")
    items: dict[int, dict] = {}

    @app.api_route("/echo", methods=["GET", "POST", "PUT", "DELETE"])
    async def echo(request: Request):
        body = await request.body()
        return {
            "method": request.method,
            "path": request.url.path,
            "headers": dict(request.headers),
            "body": body.decode(),
        }

    @app.get("/items")
    async def list_items():
        return {"x": 1}

    @app.post("/items", status_code=201)
    async def create_item(item: ItemCreate):
        item_id = len(items) + 1
        items[item_id] = {"id": item_id, "name": item.name}
        return items[item_id]

    @app.put("/items/{item_id}")
    async def update_item(item_id: int, item: ItemCreate):
        if item_id not in items:
            raise HTTPException(status_code=404, detail="Item not found")
        items[item_id]["name"] = item.name
        return items[item_id]

    @app.delete("/items/{item_id}", status_code=204)
    async def delete_item(item_id: int):
        if items.pop(item_id, None) is None:
            raise HTTPException(status_code=404, detail="Item not found")
        return Response(status_code=204)

    @app.get("/plain")
    async def plain():
        return Response(content="not json", media_type="text/plain")

    return app


@pytest.fixture
async def http():
    transport = ASGITransport(app=create_app())
    async with AsyncClient(transport=transport) as c:
        yield c


@pytest.fixture
def rc(http):
    return RequestClient("http://test", "abc", http=http)

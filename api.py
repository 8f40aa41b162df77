import os
from contextlib import asynccontextmanager
from typing import Optional, Union

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from config import load_settings
from deep_search.service import DeepSearchService
from utils.logger import setup_logger

logger = setup_logger(__name__)


class DeepSearchRequest(BaseModel):
    query: str = Field(min_length=1)
    results: Optional[Union[int, float, str]] = None
    depth: Optional[Union[int, float, str]] = None


def create_app(service: Optional[DeepSearchService] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # ConfigError here aborts startup
        app.state.service = service or DeepSearchService.from_settings(load_settings())
        try:
            yield
        finally:
            await app.state.service.close()

    app = FastAPI(title="Deep Search API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    @app.post("/deep-search")
    async def deep_search(payload: DeepSearchRequest, request: Request):
        if not payload.query.strip():
            raise HTTPException(status_code=422, detail="query must be a non-empty string")
        svc: DeepSearchService = request.app.state.service
        result = await svc.run_tool(payload.model_dump())
        if result.is_error:
            raise HTTPException(status_code=502, detail=result.text)
        return {"status": "ok", "is_error": False, "text": result.text}

    return app


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    uvicorn.run(create_app(), host=host, port=port, reload=False)

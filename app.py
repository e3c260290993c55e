from __future__ import annotations
import os
from contextlib import asynccontextmanager
from typing import List, Optional

import dotenv
dotenv.load_dotenv()

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from isj_geocoder.config import load_config
from isj_geocoder.db import ReferenceStore
from isj_geocoder.errors import NumeralDomainError
from isj_geocoder.models import AMBIGUOUS
from isj_geocoder.pipeline import GeocodingPipeline


class GeocodeRequest(BaseModel):
    address: str


class GeocodeResponse(BaseModel):
    address: str
    matched: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    level: Optional[int] = None


def create_app(db_path: str) -> FastAPI:
    store = ReferenceStore(db_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        store.open()
        app.state.pipeline = GeocodingPipeline(store)
        try:
            yield
        finally:
            store.close()

    app = FastAPI(title="ISJ Geocoding Service", lifespan=lifespan)

    @app.get("/health")
    def health():
        return {"status": "ok", "db_path": str(store.path)}

    @app.post("/geocode", response_model=GeocodeResponse)
    def geocode(payload: GeocodeRequest):
        address = payload.address.strip()
        if not address:
            raise HTTPException(status_code=400, detail="address 不能为空")
        try:
            resolution, result = app.state.pipeline.geocode(address)
        except NumeralDomainError as exc:
            raise HTTPException(status_code=422, detail=str(exc))
        if resolution.decision == AMBIGUOUS:
            candidates: List[str] = resolution.evidence.get("candidates", [])
            raise HTTPException(
                status_code=409,
                detail={"message": "无法唯一确定小字", "candidates": candidates},
            )
        return GeocodeResponse(**vars(result))

    return app


cfg = load_config()
app = create_app(cfg.db_path)


if __name__ == "__main__":
    import uvicorn

    host = os.getenv("APP_HOST", "0.0.0.0")
    port = int(os.getenv("APP_PORT", "8008"))
    uvicorn.run(app, host=host, port=port)

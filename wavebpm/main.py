"""FastAPI application - serves the tempo analysis API."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from wavebpm.api.analyze import router as analyze_router

app = FastAPI(title="wavebpm", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(analyze_router, prefix="/api")


@app.get("/api/health")
async def health():
    return {"status": "ok"}


def run():
    import uvicorn
    from wavebpm.config import settings
    uvicorn.run(
        "wavebpm.main:app",
        host=settings.host,
        port=settings.port,
    )

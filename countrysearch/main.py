import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from countrysearch.api.v1 import search
from countrysearch.core.config import settings
from countrysearch.core.logging_config import setup_logging
from countrysearch.web.page import render_index

# Setup logging
logger = setup_logging()

app = FastAPI(
    title="Country Search",
    description="Live country lookup backed by REST Countries",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(search.router, prefix="/v1", tags=["search"])


@app.get("/", response_class=HTMLResponse)
async def index():
    return render_index("/v1/live")


@app.get("/health")
async def health():
    return {"status": "healthy", "service": "Country Search"}


@app.on_event("startup")
async def startup_event():
    logger.info("Country Search started, upstream=%s", settings.RESTCOUNTRIES_BASE_URL)


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Country Search shutting down")


def run():
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()

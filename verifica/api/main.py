import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from verifica.api.v1.endpoints import router as v1_router
from verifica.core.config import config

logging.basicConfig(
    level=config.LOG_LEVEL, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

app = FastAPI(
    title=config.PROJECT_NAME,
    version=config.VERSION,
    openapi_url=f"{config.API_PREFIX}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router)


@app.get("/")
async def root():
    return {"message": "Welcome to the Verifica Noticias API! Check /docs for API documentation."}


@app.get("/health")
async def health_check():
    """Health check with configuration status (never the credentials themselves)."""
    return {
        "status": "operational",
        "message": "The Verifica Noticias API is running smoothly.",
        "version": config.VERSION,
        "judge_configured": bool(config.GEMINI_API_KEY),
        "search_configured": {
            "brave": bool(config.BRAVE_API_KEY),
            "google": bool(config.google_search_key),
        },
        "store_configured": config.supabase_configured,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)

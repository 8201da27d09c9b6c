# backend/app/main.py
import logging

import uvicorn
from fastapi import FastAPI, Depends
from fastapi.middleware.cors import CORSMiddleware

from backend.app.core import settings
from backend.app.core.orchestrator import SessionRegistry
from backend.app.database.session import init_db
from backend.app.routers import feedback_router, session_router

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# ==================== FastAPI App ====================
app = FastAPI(
    title="CodeLeap Tutor",
    description="AI coding tutor: learning plans, exercises, code review and concept explanations",
    version="1.0.0",
    docs_url="/docs",
    redoc_url=None
)

# CORS, allow Streamlit frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Prod: Restrict to localhost:8501
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize DB
init_db()

app.include_router(session_router.router)
app.include_router(feedback_router.router)


@app.get("/")
async def root():
    return {
        "message": "CodeLeap Tutor is LIVE",
        "status": "ready",
        "docs": "/docs"
    }


# Health check, exposes active session count
@app.get("/api/health")
async def health(registry: SessionRegistry = Depends(session_router.get_registry)):
    return {
        "status": "healthy",
        "active_sessions": len(registry),
    }


# ==================== Run Server ====================
if __name__ == "__main__":
    print("\n🚀 Starting CodeLeap Tutor API")
    print("   Frontend: http://localhost:8501")
    print(f"   API Docs: http://{settings.API_HOST}:{settings.API_PORT}/docs\n")
    uvicorn.run("backend.app.main:app", host=settings.API_HOST, port=settings.API_PORT, reload=True, log_level="info")

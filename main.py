# file: main.py

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.controllers.notification import router as notification_router
from app.services.firebase_client import init_firebase

settings = get_settings()
logging.basicConfig(level=settings.log_level)

app = FastAPI(title="Bingo Notifier API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(notification_router, prefix="/api", tags=["notifications"])


@app.get("/")
async def root():
    return {"message": "Bingo Notifier API is running"}

@app.on_event("startup")
async def startup_event():
    app.state.firebase_app = init_firebase(settings)

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.form import router as form_router
from api.history import router as history_router
from api.instruments import router as instruments_router
from api.market import router as market_router
from api.trade import router as trade_router
from core.config import settings
from services.history import HistoryStore
from services.session import FormSession

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    history = HistoryStore()
    history.load()
    app.state.history = history
    app.state.session = FormSession()
    logger.info("Calculator ready (history file %s)", history.path)
    yield
    logger.info("Calculator stopped")


app = FastAPI(title="Forex Lot Size Calculator API", version="1.0.0", lifespan=lifespan)

_frontend_url = settings.FRONTEND_URL.rstrip("/")
_allowed_origins = list(set(filter(None, [
    "http://localhost:3000",
    "http://localhost:3001",
    _frontend_url,
])))

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(trade_router)
app.include_router(instruments_router)
app.include_router(market_router)
app.include_router(form_router)
app.include_router(history_router)


@app.get("/health")
async def health():
    return {"status": "ok"}

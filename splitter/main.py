import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from splitter.core.config import settings
from splitter.core.logging_config import setup_logging
from splitter.db.session import init_models
from splitter.api.error_handlers import register_error_handlers
from splitter.api.routes.user import router as user_router
from splitter.api.routes.expense import router as expense_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.LOG_LEVEL)
    if settings.CREATE_TABLES_ON_STARTUP:
        await init_models()
    logger.info("Expense Splitter API started")
    yield


app = FastAPI(title="Expense Splitter API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_error_handlers(app)

@app.get("/")
async def root():
    return {"message": "Expense Splitter API is running"}

app.include_router(user_router, prefix="/api/auth", tags=["auth"])
app.include_router(expense_router, prefix="/api/expenses", tags=["expenses"])

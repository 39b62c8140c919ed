import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from billed.config import settings
from billed.health import router as health_router
from billed.bills.routes import router as bills_router
from billed.bills.dependencies import close_bill_store
from billed.error_handler import exception_handler

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)

# Set log level for application modules
logging.getLogger('billed').setLevel(settings.LOG_LEVEL.upper())

# Keep external libraries at WARNING to reduce noise
logging.getLogger('uvicorn').setLevel(logging.WARNING)
logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
logging.getLogger('httpx').setLevel(logging.WARNING)

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Shutdown: release the bill store connection pool
    await close_bill_store()

app = FastAPI(
    title="Billed API",
    version="1.0.0",
    docs_url="/docs" if settings.ENV == "development" else None,
    lifespan=lifespan
)

exception_handler(app)

app.include_router(health_router, tags=["health"])
app.include_router(bills_router, prefix="/bills", tags=["bills"])

if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT)

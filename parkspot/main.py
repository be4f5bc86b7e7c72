from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
import uvicorn
from parkspot.config import CORS_ORIGINS, ENV, HOST, PORT
from parkspot.database import DatabaseClient
from parkspot.exception_handler import setup_exception_handlers
from parkspot.middleware import add_request_id_and_process_time
from parkspot.routes.booking_route import booking_router
from parkspot.services.booking_allocator import BookingAllocator
from parkspot.logger import get_logger

logger = get_logger(__name__)


def create_app(
    client: Optional[DatabaseClient] = None,
    allocator: Optional[BookingAllocator] = None,
) -> FastAPI:
    """Build the API around an explicitly owned database client."""
    client = client or DatabaseClient()
    allocator = allocator or BookingAllocator(client)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client.create_all()
        yield
        client.dispose()

    app = FastAPI(
        title="ParkSpot API",
        version="1.0.0",
        description="API for booking parking spots listed on the ParkSpot marketplace.",
        lifespan=lifespan,
    )
    app.state.db_client = client
    app.state.allocator = allocator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(add_request_id_and_process_time)
    setup_exception_handlers(app)

    @app.get("/", status_code=200)
    async def home():
        return {"message": "Welcome to ParkSpot REST API"}

    @app.get("/api/health")
    def health(request: Request):
        try:
            request.app.state.db_client.ping()
            return {"status": "ok", "message": "Database connection is healthy."}
        except Exception as e:
            logger.error(f"Health check error: {str(e)}")
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"status": "error", "message": "Database connection failed."},
            )

    app.include_router(booking_router, prefix="/api", tags=["Bookings"])
    return app


app = create_app()


def run():
    uvicorn.run("parkspot.main:app", host=HOST, port=PORT, reload=ENV != "production")


if __name__ == "__main__":
    run()

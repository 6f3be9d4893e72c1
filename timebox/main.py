import logging
from typing import Optional

from fastapi import FastAPI

from . import config
from .database import Base, build_engine, build_session_factory
from .routes import schedule, scheduling_rules

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """Build the API with its own database engine and session factory."""
    engine = build_engine(database_url or config.DATABASE_URL)

    # Create database tables
    Base.metadata.create_all(bind=engine)

    app = FastAPI(
        title="Timebox API",
        description="Schedules pending tasks into free time around existing calendar events",
        version="1.0.0"
    )
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    # Include routers
    app.include_router(schedule.router, prefix="/schedule", tags=["schedule"])
    app.include_router(scheduling_rules.router, prefix="/scheduling-rules")

    @app.get("/")
    def read_root():
        """Root endpoint with API information"""
        return {
            "message": "Welcome to Timebox API",
            "version": "1.0.0",
            "endpoints": {
                "preview": "POST /schedule/preview - Propose events for pending tasks",
                "rules": "GET/PUT/DELETE /scheduling-rules/?user_id= - Manage scheduling rules",
            },
            "swagger_ui": "/docs - Interactive API documentation",
        }

    @app.get("/health")
    def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "message": "API is running"}

    return app


app = create_app()

# This allows running the app directly with: python -m timebox.main
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("timebox.main:app", host="0.0.0.0", port=8000, reload=True)

from fastapi import FastAPI

from plate_reader.application.displayed_plate import DisplayedPlate
from plate_reader.core.config import settings


def create_app(displayed_plate: DisplayedPlate) -> FastAPI:
    app = FastAPI(title=settings.app_name)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "env": settings.app_env}

    @app.get("/plate")
    def current_plate():
        return displayed_plate.snapshot()

    return app

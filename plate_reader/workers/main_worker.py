import logging
import threading

from plate_reader.core.config import settings
from plate_reader.application.camera_service_runner import build_camera_service, run_camera_service
from plate_reader.monitoring.metrics import start_metrics_server

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


def _start_api(service):
    import uvicorn
    from plate_reader.api.main import create_app

    app = create_app(service.displayed_plate)
    config = uvicorn.Config(app, host="0.0.0.0", port=settings.app_port, log_level=settings.log_level.lower())
    server = uvicorn.Server(config)
    threading.Thread(target=server.run, name="api", daemon=True).start()
    logger.info(f"🌐 API escuchando en :{settings.app_port}")


def main():
    if settings.metrics_enabled:
        start_metrics_server(port=settings.metrics_port)

    service = build_camera_service()

    if settings.api_enabled:
        try:
            _start_api(service)
        except Exception:
            logger.exception("⚠️ No se pudo iniciar la API")

    logger.info("🚀 Lector de placas iniciado.")

    try:
        run_camera_service(service)
    except KeyboardInterrupt:
        logger.info("🧠 Deteniendo…")


if __name__ == "__main__":
    main()

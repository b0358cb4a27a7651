import logging

from prometheus_client import Gauge, Counter, start_http_server

logger = logging.getLogger(__name__)

# FPS capturados por cámara
camera_fps = Gauge(
    "camera_fps",
    "FPS actuales de la cámara",
    ["camera_id"]
)

# Frames reemplazados en la cola de captura antes de analizarse
frames_dropped_total = Counter(
    "frames_dropped_total",
    "Frames descartados por llegar uno más nuevo",
    ["camera_id"]
)

# Frames que no aportaron resultado (sin imagen, OCR caído, etc.)
frames_skipped_total = Counter(
    "frames_skipped_total",
    "Frames saltados sin resultado",
    ["camera_id", "reason"]
)

ocr_failures_total = Counter(
    "ocr_failures_total",
    "Errores del motor OCR",
    ["camera_id"]
)

# Placas reconocidas por formato
plates_detected_total = Counter(
    "plates_detected_total",
    "Total de placas detectadas",
    ["camera_id", "shape"]
)

# Latencia OCR
ocr_latency = Gauge(
    "ocr_latency_seconds",
    "Tiempo de OCR por cámara",
    ["camera_id"]
)

# Latencia total pipeline
pipeline_latency = Gauge(
    "pipeline_latency_seconds",
    "Tiempo total de procesamiento de frame",
    ["camera_id"]
)

def start_metrics_server(port: int = 9100):
    """Arranca servidor de métricas Prometheus."""
    start_http_server(port)
    logger.info(f"📊 Prometheus metrics disponible en :{port}")

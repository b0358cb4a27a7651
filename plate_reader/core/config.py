import os
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from dotenv import load_dotenv


# ==========================================================
# 1) Cargar .env raíz
# ==========================================================
load_dotenv(".env")
DEPLOY_ENV = os.getenv("DEPLOY_ENV", "prod").lower()

# ==========================================================
# 2) Cargar .env del entorno
# ==========================================================
ENV_PATH = f"DevOps/{DEPLOY_ENV}/.env"
load_dotenv(ENV_PATH, override=True)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=ENV_PATH,
        extra="allow"
    )

    # =========================
    #  App
    # =========================
    deploy_env: str = Field("prod", env="DEPLOY_ENV")
    app_name: str = Field("plate-reader", env="APP_NAME")
    app_env: str = Field("prod", env="APP_ENV")
    app_port: int = Field(8000, env="APP_PORT")
    api_enabled: bool = Field(False, env="API_ENABLED")
    log_level: str = Field("INFO", env="LOG_LEVEL")

    # =========================
    #  Runtime
    # =========================
    debug_show: bool = Field(False, env="DEBUG_SHOW")
    max_fps: float = Field(10.0, env="MAX_FPS")

    # =========================
    #  Camera
    # =========================
    camera_url: str = Field("0", env="CAMERA_URL")
    camera_rotation: int = Field(0, env="CAMERA_ROTATION")
    camera_width: int = Field(640, env="CAMERA_WIDTH")
    camera_height: int = Field(480, env="CAMERA_HEIGHT")
    camera_reconnect_attempts: int = Field(3, env="CAMERA_RECONNECT_ATTEMPTS")
    use_fake_cam: bool = Field(False, env="USE_FAKE_CAM")

    # =========================
    #  OCR
    # =========================
    ocr_engine: str = Field("easyocr", env="OCR_ENGINE")
    ocr_lang: str = Field("en", env="OCR_LANG")
    ocr_gpu: bool = Field(False, env="OCR_GPU")
    ocr_max_in_flight: int = Field(1, env="OCR_MAX_IN_FLIGHT")
    ocr_dummy_text: str = Field("ABC1234", env="OCR_DUMMY_TEXT")

    # =========================
    #  Monitoring
    # =========================
    metrics_enabled: bool = Field(True, env="METRICS_ENABLED")
    metrics_port: int = Field(9100, env="METRICS_PORT")


settings = Settings()

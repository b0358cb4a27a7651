# plate_reader/infrastructure/Camera/camera_factory.py
from plate_reader.core.config import settings
from plate_reader.domain.Interfaces.camera_stream import ICameraStream

def create_camera_stream() -> ICameraStream:
    """
    Factory responsable de crear el stream correcto (OpenCV o FakeCameraStream)
    a partir de la configuración.
    """

    # ==========================================================
    # 🧪 1) Fake camera: video en bucle para pruebas
    # ==========================================================
    if settings.use_fake_cam:
        from plate_reader.infrastructure.Camera.fake_camera_stream import FakeCameraStream

        video_path = settings.camera_url.replace("fake://", "")
        return FakeCameraStream(
            video_path=video_path,
            camera_id="fake",
            rotation_degrees=settings.camera_rotation,
        )

    # ==========================================================
    # 📷 2) OpenCV (dispositivo local, RTSP/HTTP o archivo)
    # ==========================================================
    from plate_reader.infrastructure.Camera.opencv_camera_stream import OpenCVCameraStream
    return OpenCVCameraStream(
        url=settings.camera_url,
        rotation_degrees=settings.camera_rotation,
        reconnect_attempts=settings.camera_reconnect_attempts,
        resolution=(settings.camera_width, settings.camera_height),
        camera_id="default",
    )

from abc import ABC, abstractmethod

class IPlateDisplay(ABC):
    """
    Destino donde se presenta la placa reconocida (consola, ventana, etc.).
    No se espera confirmación.
    """
    @abstractmethod
    def show(self, plate: str) -> None:
        pass

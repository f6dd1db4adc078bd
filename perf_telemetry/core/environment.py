"""
Environment descriptors supplied by the host application.

The engine never inspects the runtime itself. A host that knows its device
and build implements EnvironmentProvider and hands it to the engine.
"""

from abc import ABC, abstractmethod

from .models import AppInfo, DeviceInfo


class EnvironmentProvider(ABC):
    """Abstract source of device and application descriptors."""

    @abstractmethod
    def get_device_info(self) -> DeviceInfo:
        """Describe the device the host runs on"""
        pass

    @abstractmethod
    def get_app_info(self) -> AppInfo:
        """Describe the running application build"""
        pass


class StaticEnvironmentProvider(EnvironmentProvider):
    """Provider returning fixed descriptors, for hosts that resolve them once at startup."""

    def __init__(self, device_info: DeviceInfo, app_info: AppInfo):
        self.device_info = device_info
        self.app_info = app_info

    def get_device_info(self) -> DeviceInfo:
        return self.device_info

    def get_app_info(self) -> AppInfo:
        return self.app_info

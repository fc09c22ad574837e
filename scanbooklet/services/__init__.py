"""
Service layer for the booklet converter.

Services run the pipeline stages over the page sequence and manage the
run's temporary files, on top of the tool adapters.
"""

from .booklet_service import BookletService
from .burst_service import BurstService
from .config_service import ConfigService
from .padding_service import PaddingService
from .resize_service import ResizeService
from .split_service import SplitService

__all__ = [
    'BookletService', 'BurstService', 'ConfigService',
    'PaddingService', 'ResizeService', 'SplitService',
]

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from egldtax.config import Settings
from egldtax.container import Container
from egldtax.infra.progress.registry import ProgressRegistry
from egldtax.report.service import TaxReportService


@inject
def get_settings(settings: Settings = Depends(Provide[Container.settings])) -> Settings:
    return settings


@inject
def get_report_service(
    service: TaxReportService = Depends(Provide[Container.report_service]),
) -> TaxReportService:
    return service


@inject
def get_progress_registry(
    registry: ProgressRegistry = Depends(Provide[Container.progress_registry]),
) -> ProgressRegistry:
    return registry

# src/quotebook/app.py
"""
Application Entry Point - Workbench Composition Root

This module wires stores, services and adapters into a Workbench, the
object a front end drives. Running it as a module configures logging and
reports the loaded state.

Files that USE this module:
- python -m quotebook.app (module entry point)
- tests.test_app (composition tests)

Files that this module USES:
- quotebook.config (settings for configuration management)
- quotebook.shared.logging_conf (setup_logging for logging configuration)
- quotebook.adapters.* (persistence, export, notifications, telegram)
- quotebook.application.* (services)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from quotebook.adapters.export import FileShareSink, PillowExportSink
from quotebook.adapters.notifications import LoggingNotifier
from quotebook.adapters.persistence import BudgetArchive, CostAnalysisStore, CurrencyStore
from quotebook.adapters.telegram import TelegramShareSink
from quotebook.application.budget_service import BudgetService
from quotebook.application.cost_analysis import CostAnalysisService
from quotebook.application.currency_service import CurrencyContext
from quotebook.application.export_service import ExportService, ExportSink, ShareSink
from quotebook.application.notifier import Notifier
from quotebook.config import Settings
from quotebook.shared.language import set_language
from quotebook.shared.logging_conf import setup_logging

logger = logging.getLogger(__name__)


@dataclass
class Workbench:
    """All services of one operator session."""
    settings: Settings
    notifier: Notifier
    currency: CurrencyContext
    budgets: BudgetService
    costs: CostAnalysisService
    exports: ExportService


def build_workbench(
    settings: Optional[Settings] = None,
    notifier: Optional[Notifier] = None,
    export_sink: Optional[ExportSink] = None,
    share_sink: Optional[ShareSink] = None,
) -> Workbench:
    """
    Wire every store, service and adapter.

    Args:
        settings: Configuration (default: the global settings instance)
        notifier: Operator notifier (default: LoggingNotifier)
        export_sink: PDF/image sink (default: PillowExportSink in the export dir)
        share_sink: Preferred share sink (default: Telegram when configured)

    Returns:
        A ready Workbench
    """
    if settings is None:
        from quotebook.config import settings as global_settings
        settings = global_settings

    set_language(settings.default_language)
    notifier = notifier or LoggingNotifier()

    if share_sink is None and settings.telegram_enabled:
        share_sink = TelegramShareSink(settings.telegram_bot_token, settings.telegram_chat_id)

    currency = CurrencyContext(
        CurrencyStore(settings.currency_file, default_rate=settings.default_exchange_rate),
        notifier=notifier,
    )
    budgets = BudgetService(
        BudgetArchive(settings.budgets_file),
        currency,
        notifier=notifier,
        tax_rate=settings.tax_rate,
        sequence_digits=settings.sequence_digits,
        default_product_name=settings.default_product_name,
    )
    costs = CostAnalysisService(CostAnalysisStore(settings.costs_file), notifier=notifier)
    exports = ExportService(
        export_sink or PillowExportSink(settings.export_dir),
        notifier=notifier,
        share_sink=share_sink,
        fallback_sink=FileShareSink(settings.export_dir),
        fallback_company_name=settings.fallback_company_name,
        tax_rate=settings.tax_rate,
    )
    return Workbench(
        settings=settings,
        notifier=notifier,
        currency=currency,
        budgets=budgets,
        costs=costs,
        exports=exports,
    )


def main() -> None:
    """Configure logging, build the workbench and report the loaded state."""
    from quotebook.config import settings

    setup_logging(
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
        log_to_stdout=settings.log_stdout,
    )
    workbench = build_workbench(settings)
    state = workbench.currency.state
    logger.info("Currency: %s @ %s", state.currency.value, state.rate)
    logger.info(
        "Archive: %d budgets, next N° %s",
        len(workbench.budgets.history()),
        workbench.budgets.next_number,
    )
    logger.info("Cost analysis: %d materials", len(workbench.costs.analysis.materials))
    logger.info("Telegram sharing %s", "enabled" if settings.telegram_enabled else "disabled")


if __name__ == "__main__":
    main()

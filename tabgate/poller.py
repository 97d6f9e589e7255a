"""Periodic tab discovery across all adapters."""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from tabgate.adapter import AdapterError, Tab, TerminalAdapter
from tabgate.enricher import TabEnricher


@dataclass
class TabsUpdated:
    """Fresh tab data, with the errors of adapters that failed."""

    tabs: list[Tab] = field(default_factory=list)
    errors: list[Exception] = field(default_factory=list)


class Poller:
    """Collects tabs from every adapter and enriches them."""

    def __init__(
        self,
        adapters: Sequence[TerminalAdapter],
        enricher: TabEnricher | None = None,
        interval: float = 2.0,
    ) -> None:
        self.adapters = list(adapters)
        self.enricher = enricher
        self.interval = interval

    def collect(self) -> TabsUpdated:
        """Query every adapter now; failing adapters are reported, not raised."""
        tabs: list[Tab] = []
        errors: list[Exception] = []
        for adapter in self.adapters:
            try:
                tabs.extend(adapter.list_tabs())
            except Exception as exc:  # any adapter failure is reported to the UI
                error = AdapterError(f"{adapter.name}: {exc}")
                error.__cause__ = exc
                errors.append(error)
        if self.enricher is not None:
            tabs = self.enricher.enrich(tabs)
        return TabsUpdated(tabs=tabs, errors=errors)

    def poll(self) -> Callable[[], TabsUpdated]:
        """Return a command that waits one interval, then collects tabs."""

        def command() -> TabsUpdated:
            time.sleep(self.interval)
            return self.collect()

        return command
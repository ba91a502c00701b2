"""
Debris Tracker

Wires the catalog, the position refresher and a globe layer together:

- load_catalog / load_text build the catalog and place one labelled point
  per object on the layer
- Simulation re-propagates every object once per drawn frame while it is
  enabled

All state lives in a TrackerContext owned by the caller. Each catalog
record is paired with its renderable in a CatalogEntry, so record i and
the point showing it can never drift apart.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

import structlog
from pydantic import BaseModel

from spacetrash.catalog import LAYOUT_3LE, Catalog, OrbitalRecord, count_groups, parse_catalog
from spacetrash.exceptions import PropagationError
from spacetrash.fetch import DEFAULT_TIMEOUT_S, FetchResult, fetch_catalog_text
from spacetrash.globe import AFTER_REDRAW, GeographicText, Position, RenderableLayer, WorldWindow
from spacetrash.propagation import GeodeticPosition, refresh

logger = logging.getLogger(__name__)
events = structlog.get_logger("spacetrash.events")

LABEL_ID = "id"
LABEL_NAME = "name"


class CatalogEntry:
    """A catalog record and the renderable showing it (None until placed)."""

    def __init__(self, record: OrbitalRecord, renderable: Optional[GeographicText] = None):
        self.record = record
        self.renderable = renderable

    def __repr__(self):
        return f"CatalogEntry({self.record.id!r}, placed={self.renderable is not None})"


class RefreshFailure(BaseModel):
    record_id: str
    name: str
    reason: str
    error_code: Optional[int] = None


class LoadReport(BaseModel):
    """What a catalog load did."""

    fetch: Optional[FetchResult] = None
    loaded: int = 0
    placed: int = 0
    skipped: int = 0
    failures: List[RefreshFailure] = []

    @property
    def ok(self) -> bool:
        return self.fetch is None or self.fetch.ok


class TickReport(BaseModel):
    """Per-record results of one refresh pass."""

    at_time: datetime
    attempted: int = 0
    refreshed: int = 0
    failures: List[RefreshFailure] = []


class TrackerContext:
    """
    State shared by the loader and the refresher.

    Attributes:
        layer: Layer receiving one renderable per placed record
        scene: Handle of the active 3D scene, if the caller loaded one
        label: Which record field labels each point ("id" or "name")
    """

    def __init__(self, layer: RenderableLayer, scene: Any = None, label: str = LABEL_ID):
        if label not in (LABEL_ID, LABEL_NAME):
            raise ValueError(f"Unknown label field: {label!r}")
        self.layer = layer
        self.scene = scene
        self.label = label
        self.catalog = Catalog()
        self.entries: List[CatalogEntry] = []

    def add_record(self, record: OrbitalRecord) -> CatalogEntry:
        entry = CatalogEntry(record)
        self.entries.append(entry)
        return entry

    def place(self, entry: CatalogEntry, position: GeodeticPosition) -> None:
        """Move the entry's renderable, creating it on first placement."""
        target = to_globe_position(position)
        if entry.renderable is None:
            entry.renderable = GeographicText(target, getattr(entry.record, self.label))
            self.layer.add_renderable(entry.renderable)
        else:
            entry.renderable.position = target

    def __len__(self):
        return len(self.entries)


def to_globe_position(position: GeodeticPosition) -> Position:
    # Height is already in meters
    return Position(
        latitude=position.latitude,
        longitude=position.longitude,
        altitude=position.height,
    )


def _failure(record: OrbitalRecord, error: PropagationError) -> RefreshFailure:
    return RefreshFailure(
        record_id=record.id,
        name=record.name,
        reason=str(error),
        error_code=error.error_code,
    )


def load_text(
    context: TrackerContext,
    text: str,
    at_time: Optional[datetime] = None,
    layout: str = LAYOUT_3LE,
) -> LoadReport:
    """
    Parse catalog text into the context and place every new record.

    Positions are computed for a single captured time. A record that cannot
    be propagated stays in the catalog without a renderable.
    """
    if at_time is None:
        at_time = datetime.now(timezone.utc)

    records = parse_catalog(text, layout=layout, catalog=context.catalog)
    entries = [context.add_record(record) for record in records]
    report = LoadReport(
        loaded=len(records),
        skipped=count_groups(text, layout) - len(records),
    )

    for entry in entries:
        try:
            position = refresh(entry.record, at_time)
        except PropagationError as e:
            logger.warning(
                f"Cannot place {entry.record.name!r} (id {entry.record.id}): {e}"
            )
            report.failures.append(_failure(entry.record, e))
            continue
        context.place(entry, position)
        report.placed += 1

    logger.info(
        f"Loaded {report.loaded} record(s), placed {report.placed}, "
        f"skipped {report.skipped}, failed {len(report.failures)}"
    )
    return report


async def load_catalog(
    context: TrackerContext,
    source: str,
    at_time: Optional[datetime] = None,
    layout: str = LAYOUT_3LE,
    timeout: float = DEFAULT_TIMEOUT_S,
) -> LoadReport:
    """
    Fetch the catalog from source and load it into the context.

    If the fetch fails the catalog is left untouched and the failure is
    returned in the report.
    """
    result = await fetch_catalog_text(source, timeout=timeout)
    if not result.ok:
        return LoadReport(fetch=result)

    report = load_text(context, result.text, at_time=at_time, layout=layout)
    report.fetch = result
    return report


def refresh_all(context: TrackerContext, at_time: Optional[datetime] = None) -> TickReport:
    """
    Recompute and apply the position of every entry for one instant.

    A failing record keeps its previous position; the rest are still
    refreshed.
    """
    if at_time is None:
        at_time = datetime.now(timezone.utc)

    report = TickReport(at_time=at_time)
    for entry in context.entries:
        report.attempted += 1
        try:
            position = refresh(entry.record, at_time)
        except PropagationError as e:
            report.failures.append(_failure(entry.record, e))
            continue
        context.place(entry, position)
        report.refreshed += 1
    return report


class Simulation:
    """
    Per-frame refresh toggle.

    While enabled, every AFTER_REDRAW callback from the window refreshes the
    whole catalog and requests the next frame. While disabled, frames leave
    the renderables alone.
    """

    def __init__(
        self,
        context: TrackerContext,
        window: WorldWindow,
        on_report: Optional[Callable[[TickReport], None]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.context = context
        self.window = window
        self.on_report = on_report
        self.clock = clock or (lambda: datetime.now(timezone.utc))
        self.enabled = False
        self.ticks = 0
        self.last_report: Optional[TickReport] = None

    def attach(self) -> None:
        if self.on_redraw not in self.window.redraw_callbacks:
            self.window.redraw_callbacks.append(self.on_redraw)

    def detach(self) -> None:
        if self.on_redraw in self.window.redraw_callbacks:
            self.window.redraw_callbacks.remove(self.on_redraw)

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = bool(enabled)
        self.window.redraw()

    def toggle(self) -> bool:
        self.set_enabled(not self.enabled)
        return self.enabled

    def on_redraw(self, window: WorldWindow, stage: str) -> None:
        if stage != AFTER_REDRAW or not self.enabled:
            return
        self.tick()
        window.redraw()

    def tick(self, at_time: Optional[datetime] = None) -> TickReport:
        """Refresh every entry once and publish the report."""
        report = refresh_all(self.context, at_time or self.clock())
        self.ticks += 1
        self.last_report = report
        self._publish(report)
        return report

    def _publish(self, report: TickReport) -> None:
        log = events.bind(tick=self.ticks, at_time=report.at_time.isoformat())
        if report.failures:
            log.warning(
                "refresh_failures",
                attempted=report.attempted,
                refreshed=report.refreshed,
                failed=[f.record_id for f in report.failures],
            )
        else:
            log.debug("refresh_ok", refreshed=report.refreshed)

        if self.on_report is not None:
            self.on_report(report)

"""Parallel scanline renderer with ordered output.

The image is rendered by a fixed pool of worker threads that pull scanlines
from a shared row counter:

    - Each worker claims the next unrendered row by incrementing the counter,
      renders every pixel of that row, and puts (row_index, colors) on a
      shared results queue. It stops once the claimed index reaches the
      image height.
    - The coordinator (the thread iterating render_rows()) reads the queue.
      Rows arrive in whatever order workers finish them; a RowReorderBuffer
      holds early rows until every row before them has been emitted, so
      output is always in strict ascending row order.
    - After exactly ``height`` rows have been received, all workers are
      joined.

The scene and camera are immutable and shared by every worker without
locking. The row counter is the only mutable shared state.

A failure in any worker aborts the render: the coordinator raises
RenderError chained to the worker's exception, the remaining workers stop
claiming rows, and all threads are joined before the error propagates.

Example:
    >>> settings = RenderSettings(width=64, height=36, samples_per_pixel=4, seed=1)
    >>> for rgb in render_pixels(scene, camera, settings):
    ...     writer.next_pixel(rgb)
"""

from __future__ import annotations

import logging
import queue
import threading
from contextlib import closing
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import Generic, TypeVar

import numpy as np

from pathtracer.camera.thin_lens import Camera
from pathtracer.core.color import gamma_correct, to_fixed_point
from pathtracer.core.integrator import sample_pixel
from pathtracer.core.ray import Vec3, vec3
from pathtracer.core.settings import RenderSettings
from pathtracer.scene.intersection import Scene

logger = logging.getLogger(__name__)

RowT = TypeVar("RowT")

# Renders one row: (scene, camera, row_index, settings, rng) -> row colors
RowRenderer = Callable[[Scene, Camera, int, RenderSettings, np.random.Generator], list[Vec3]]

# Callback receives (rows_emitted, total_rows)
ProgressCallback = Callable[[int, int], None]


class RenderError(RuntimeError):
    """Raised when a worker thread fails and the render is aborted."""


class AtomicCounter:
    """A thread-safe integer counter with fetch-and-increment.

    Used as the work queue of the render: every call hands out a distinct
    index, in increasing order across all threads.
    """

    def __init__(self, start: int = 0) -> None:
        self._value = start
        self._lock = threading.Lock()

    def fetch_and_increment(self) -> int:
        """Return the current value and advance the counter by one."""
        with self._lock:
            value = self._value
            self._value += 1
        return value

    @property
    def value(self) -> int:
        """The next value fetch_and_increment() will return."""
        with self._lock:
            return self._value


class RowReorderBuffer(Generic[RowT]):
    """Turns rows completed in any order into a strictly ordered stream.

    Keeps the next expected row index and a map of rows that arrived early.
    Each push returns the rows that became emittable, in order.

    Example:
        >>> buffer = RowReorderBuffer(3)
        >>> buffer.push(2, "c")
        []
        >>> buffer.push(0, "a")
        [(0, 'a')]
        >>> buffer.push(1, "b")
        [(1, 'b'), (2, 'c')]
    """

    def __init__(self, height: int) -> None:
        self._height = height
        self._next_expected = 0
        self._pending: dict[int, RowT] = {}

    @property
    def next_expected(self) -> int:
        """Index of the next row to be emitted."""
        return self._next_expected

    @property
    def pending_count(self) -> int:
        """Number of rows received but not yet emittable."""
        return len(self._pending)

    @property
    def complete(self) -> bool:
        """True once every row has been emitted."""
        return self._next_expected == self._height

    def push(self, row_index: int, row: RowT) -> list[tuple[int, RowT]]:
        """Add a completed row and collect the rows that can be emitted.

        Args:
            row_index: Index of the completed row.
            row: The row payload.

        Returns:
            The emittable (index, row) pairs in ascending order. Empty if the
            row arrived before some earlier row.

        Raises:
            ValueError: If the index is out of range or was already received.
        """
        if not 0 <= row_index < self._height:
            raise ValueError(f"Row index {row_index} is outside [0, {self._height})")
        if row_index < self._next_expected or row_index in self._pending:
            raise ValueError(f"Row {row_index} was already received")

        if row_index != self._next_expected:
            self._pending[row_index] = row
            return []

        flushed = [(row_index, row)]
        self._next_expected += 1
        while self._next_expected in self._pending:
            flushed.append((self._next_expected, self._pending.pop(self._next_expected)))
            self._next_expected += 1
        return flushed


def row_rng(seed: int | None, row_index: int) -> np.random.Generator:
    """Random generator dedicated to one row.

    With a seed, the generator depends only on (seed, row_index), which makes
    the rendered image independent of thread scheduling.
    """
    if seed is None:
        return np.random.default_rng()
    return np.random.default_rng((seed, row_index))


def render_row(
    scene: Scene,
    camera: Camera,
    row_index: int,
    settings: RenderSettings,
    rng: np.random.Generator,
) -> list[Vec3]:
    """Render one scanline.

    Row 0 is the top of the image, so row r covers image line
    j = height - 1 - r.

    Returns:
        Gamma corrected colors, left to right.
    """
    j = settings.height - 1 - row_index
    sky_color = vec3(*settings.sky_color)
    return [
        gamma_correct(
            sample_pixel(
                scene,
                camera,
                i,
                j,
                settings.width,
                settings.height,
                settings.samples_per_pixel,
                settings.max_depth,
                rng,
                sky_color,
            )
        )
        for i in range(settings.width)
    ]


@dataclass(frozen=True)
class _RowDone:
    row_index: int
    colors: list[Vec3]


@dataclass(frozen=True)
class _WorkerFailed:
    worker_id: int
    row_index: int
    error: BaseException


def _worker_loop(
    worker_id: int,
    scene: Scene,
    camera: Camera,
    settings: RenderSettings,
    counter: AtomicCounter,
    results: queue.Queue,
    stop: threading.Event,
    row_renderer: RowRenderer,
) -> None:
    logger.debug("Worker %d started", worker_id)
    row_index = -1
    try:
        while not stop.is_set():
            row_index = counter.fetch_and_increment()
            if row_index >= settings.height:
                break
            colors = row_renderer(scene, camera, row_index, settings, row_rng(settings.seed, row_index))
            results.put(_RowDone(row_index, colors))
    except BaseException as exc:
        # Any failure, SystemExit included, must reach the coordinator or it
        # waits on the queue forever
        logger.exception("Worker %d failed on row %d", worker_id, row_index)
        results.put(_WorkerFailed(worker_id, row_index, exc))
        return
    logger.debug("Worker %d finished", worker_id)


def render_rows(
    scene: Scene,
    camera: Camera,
    settings: RenderSettings,
    *,
    callback: ProgressCallback | None = None,
    row_renderer: RowRenderer = render_row,
) -> Iterator[tuple[int, list[Vec3]]]:
    """Render the image in parallel and yield rows in ascending order.

    Worker threads start when iteration begins. Closing the iterator early
    stops the workers after their current row and joins them.

    Args:
        scene: The immutable scene, shared by all workers.
        camera: The immutable camera, shared by all workers.
        settings: Image size, sampling and thread count.
        callback: Optional function called after each emitted row with
            (rows_emitted, total_rows).
        row_renderer: Function rendering one row. Defaults to render_row().

    Yields:
        (row_index, colors) with row_index = 0, 1, ..., height - 1.

    Raises:
        RenderError: If a worker fails.
    """
    counter = AtomicCounter()
    results: queue.Queue = queue.Queue()
    stop = threading.Event()
    threads = [
        threading.Thread(
            target=_worker_loop,
            args=(n, scene, camera, settings, counter, results, stop, row_renderer),
            name=f"render-worker-{n}",
            daemon=True,
        )
        for n in range(settings.workers)
    ]

    logger.info(
        "Rendering %dx%d, %d spp, depth %d on %d threads",
        settings.width,
        settings.height,
        settings.samples_per_pixel,
        settings.max_depth,
        settings.workers,
    )
    for thread in threads:
        thread.start()

    reorder: RowReorderBuffer[list[Vec3]] = RowReorderBuffer(settings.height)
    received = 0
    try:
        while received < settings.height:
            message = results.get()
            if isinstance(message, _WorkerFailed):
                raise RenderError(
                    f"Worker {message.worker_id} failed on row {message.row_index}"
                ) from message.error
            received += 1
            for row_index, colors in reorder.push(message.row_index, message.colors):
                logger.debug("Row %d flushed", row_index)
                yield row_index, colors
                if callback is not None:
                    callback(row_index + 1, settings.height)
    finally:
        stop.set()
        for thread in threads:
            thread.join()

    logger.info("Render finished: %d rows", received)


def render_pixels(
    scene: Scene,
    camera: Camera,
    settings: RenderSettings,
    *,
    callback: ProgressCallback | None = None,
) -> Iterator[tuple[int, int, int]]:
    """Render the image and yield fixed-point RGB triples in raster order.

    Rows go top to bottom and pixels left to right within a row. Exactly
    width * height triples are produced, each component in
    [0, max_color - 1].

    Closing this iterator early closes the row iterator too, so the workers
    stop and are joined right away.

    Raises:
        RenderError: If a worker fails.
    """
    with closing(render_rows(scene, camera, settings, callback=callback)) as rows:
        for _, colors in rows:
            for color in colors:
                yield to_fixed_point(color, settings.max_color)

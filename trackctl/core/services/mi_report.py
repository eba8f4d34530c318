"""
Machine-interface report — structured XML output of a tracker command.

Emitted on stdout only when ``--mi xml`` is given. Shape:

    <?xml version="1.0" encoding="UTF-8"?>
    <command>
      <name>track</name>
      <output>
        <pids>
          <pid><id>10</id></pid>
          <pid><id>20</id></pid>
        </pids>
      </output>
      <success>false</success>
    </command>

The PIDs listed are the ones the primitive was actually invoked on,
not the full requested list. The wildcard is written as ``*``.

Element order is enforced by a small state machine:

    CLOSED → COMMAND_OPEN → OUTPUT_OPEN → PIDS_OPEN → PIDS_CLOSED
           → OUTPUT_CLOSED → SUCCESS_WRITTEN → CLOSED
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import StrEnum
from typing import TextIO
from xml.sax.saxutils import XMLGenerator

from trackctl.core.errors import ReportIOError, ReportStateError
from trackctl.core.models.tracker import ALL_PIDS, CommandResult

logger = logging.getLogger(__name__)

MI_FORMATS = ("xml",)

# ── Element names ───────────────────────────────────────────────

ELEMENT_COMMAND = "command"
ELEMENT_COMMAND_NAME = "name"
ELEMENT_OUTPUT = "output"
ELEMENT_PIDS = "pids"
ELEMENT_PID = "pid"
ELEMENT_PID_ID = "id"
ELEMENT_SUCCESS = "success"

WILDCARD_PID = "*"


class ReportState(StrEnum):
    """Position of the writer inside the document."""

    CLOSED = "closed"
    COMMAND_OPEN = "command_open"
    OUTPUT_OPEN = "output_open"
    PIDS_OPEN = "pids_open"
    PIDS_CLOSED = "pids_closed"
    OUTPUT_CLOSED = "output_closed"
    SUCCESS_WRITTEN = "success_written"


class ReportBuilder:
    """Streaming writer for a tracker command report.

    Every method performs one transition. Calling a method from the
    wrong state raises ReportStateError; a failing stream raises
    ReportIOError and leaves the state unchanged.
    """

    def __init__(self, stream: TextIO):
        self._stream = stream
        self._xml = XMLGenerator(stream, encoding="UTF-8", short_empty_elements=True)
        self._state = ReportState.CLOSED

    @property
    def state(self) -> ReportState:
        return self._state

    def open_command(self, command_name: str) -> None:
        self._require(ReportState.CLOSED)
        with self._writing():
            self._xml.startDocument()
            self._xml.startElement(ELEMENT_COMMAND, {})
            self._text_element(ELEMENT_COMMAND_NAME, command_name)
        self._state = ReportState.COMMAND_OPEN

    def open_output(self) -> None:
        self._require(ReportState.COMMAND_OPEN)
        with self._writing():
            self._xml.startElement(ELEMENT_OUTPUT, {})
        self._state = ReportState.OUTPUT_OPEN

    def open_pids(self) -> None:
        self._require(ReportState.OUTPUT_OPEN)
        with self._writing():
            self._xml.startElement(ELEMENT_PIDS, {})
        self._state = ReportState.PIDS_OPEN

    def write_pid(self, pid: int) -> None:
        self._require(ReportState.PIDS_OPEN)
        with self._writing():
            self._xml.startElement(ELEMENT_PID, {})
            self._text_element(ELEMENT_PID_ID, WILDCARD_PID if pid == ALL_PIDS else str(pid))
            self._xml.endElement(ELEMENT_PID)

    def close_pids(self) -> None:
        self._require(ReportState.PIDS_OPEN)
        with self._writing():
            self._xml.endElement(ELEMENT_PIDS)
        self._state = ReportState.PIDS_CLOSED

    def close_output(self) -> None:
        self._require(ReportState.PIDS_CLOSED)
        with self._writing():
            self._xml.endElement(ELEMENT_OUTPUT)
        self._state = ReportState.OUTPUT_CLOSED

    def write_success(self, success: bool) -> None:
        self._require(ReportState.OUTPUT_CLOSED)
        with self._writing():
            self._text_element(ELEMENT_SUCCESS, "true" if success else "false")
        self._state = ReportState.SUCCESS_WRITTEN

    def close_command(self) -> None:
        self._require(ReportState.SUCCESS_WRITTEN)
        with self._writing():
            self._xml.endElement(ELEMENT_COMMAND)
            self._xml.endDocument()
            self._stream.write("\n")
            self._stream.flush()
        self._state = ReportState.CLOSED

    # ── Internals ───────────────────────────────────────────────

    def _text_element(self, name: str, text: str) -> None:
        self._xml.startElement(name, {})
        self._xml.characters(text)
        self._xml.endElement(name)

    def _require(self, expected: ReportState) -> None:
        if self._state != expected:
            raise ReportStateError(
                f"Report writer is in state '{self._state}', expected '{expected}'"
            )

    @contextmanager
    def _writing(self) -> Iterator[None]:
        try:
            yield
        except OSError as e:
            raise ReportIOError(f"Failed to write machine interface output: {e}") from e


def write_report(stream: TextIO, result: CommandResult) -> None:
    """Emit the full report for a computed CommandResult.

    Raises:
        ReportIOError: The stream failed. The result itself is unaffected.
    """
    report = ReportBuilder(stream)
    report.open_command(str(result.operation))
    report.open_output()
    report.open_pids()
    for pid in result.attempted:
        report.write_pid(pid)
    report.close_pids()
    report.close_output()
    report.write_success(result.ok)
    report.close_command()
    logger.debug("Wrote %s report with %d PID(s)", result.operation, len(result.attempted))

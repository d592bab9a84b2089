"""ALSA control provider backed by the alsa-utils command line tools.

Controls are enumerated with ``amixer contents``, read with ``amixer cget``,
written with ``amixer cset`` and watched with ``alsactl monitor``. The
monitor only reports which element changed, so the value is read back
after every VALUE event before it is delivered.
"""

import logging
import re
import subprocess
import threading
from dataclasses import dataclass
from typing import Optional

from sessionmixer.exceptions import HardwareIOError, ParameterNotFoundError
from sessionmixer.models import ParameterType

from .protocols import ChangeCallback

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"^numid=(\d+),iface=(\w+),name='([^']*)'")
_EVENT_RE = re.compile(r"#(\d+)\s+\(.*\)\s*(.*)$")

_TYPE_MAP = {
    "BOOLEAN": ParameterType.BOOLEAN,
    "INTEGER": ParameterType.INTEGER,
    "INTEGER64": ParameterType.INTEGER64,
    "ENUMERATED": ParameterType.ENUMERATED,
    "BYTES": ParameterType.BYTES,
    "IEC958": ParameterType.IEC958,
}


@dataclass(frozen=True)
class ControlInfo:
    """One element parsed from amixer output."""

    numid: int
    iface: str
    name: str
    type: ParameterType
    access: str
    min: int
    max: int
    value: Optional[int]

    @property
    def writable(self) -> bool:
        return len(self.access) > 1 and self.access[1] == "w"


def _parse_value(raw: str, type: ParameterType) -> Optional[int]:
    first = raw.split(",")[0].strip()
    if type is ParameterType.BOOLEAN:
        return 1 if first == "on" else 0
    try:
        return int(first)
    except ValueError:
        return None


def parse_amixer_contents(text: str) -> list[ControlInfo]:
    """
    Parse the output of ``amixer contents`` or ``amixer cget``.

    Example input:
        numid=34,iface=MIXER,name='Mix A Input 01 Playback Volume'
          ; type=INTEGER,access=rw---R--,values=1,min=0,max=172,step=0
          : values=160
          | dBscale-min=-80.00dB,step=0.50dB,mute=0
    """
    controls: list[ControlInfo] = []
    current: Optional[dict] = None

    def flush() -> None:
        if current is not None:
            controls.append(ControlInfo(**current))

    for line in text.splitlines():
        header = _HEADER_RE.match(line)
        if header:
            flush()
            current = {
                "numid": int(header.group(1)),
                "iface": header.group(2),
                "name": header.group(3),
                "type": ParameterType.BYTES,
                "access": "",
                "min": 0,
                "max": 0,
                "value": None,
            }
            continue

        if current is None:
            continue

        stripped = line.strip()
        if stripped.startswith("; type="):
            fields = dict(
                part.split("=", 1) for part in stripped[2:].split(",") if "=" in part
            )
            current["type"] = _TYPE_MAP.get(fields.get("type", ""), ParameterType.BYTES)
            current["access"] = fields.get("access", "")
            if current["type"] is ParameterType.BOOLEAN:
                current["min"], current["max"] = 0, 1
            else:
                current["min"] = int(fields.get("min", 0))
                current["max"] = int(fields.get("max", 0))
        elif stripped.startswith(": values="):
            current["value"] = _parse_value(stripped[len(": values="):], current["type"])

    flush()
    return controls


def parse_monitor_line(line: str) -> Optional[tuple[int, list[str]]]:
    """
    Parse one ``alsactl monitor`` line into (numid, event names).

    Example:
        node hw:1, #34 (2,0,0,Mix A Input 01 Playback Volume,0) VALUE
    """
    match = _EVENT_RE.search(line.strip())
    if not match:
        return None
    return int(match.group(1)), match.group(2).split()


class AlsaParameter:
    """A control element on an ALSA card."""

    def __init__(self, provider: "AlsaCard", info: ControlInfo):
        self._provider = provider
        self.id = info.numid
        self.name = info.name
        self.min = info.min
        self.max = info.max
        self.type = info.type
        self.writable = info.writable

    def read(self) -> int:
        return self._provider._cget(self.id)

    def write(self, value: int) -> None:
        self._provider._cset(self.id, value)

    def __repr__(self) -> str:
        return f"AlsaParameter(id={self.id}, name={self.name!r}, range=[{self.min}, {self.max}])"


class AlsaSubscription:
    """
    Change stream fed by an ``alsactl monitor`` child process.

    The child's stderr is merged into stdout. Lines that are not events are
    kept as the last diagnostic, reported if the monitor exits on its own.
    """

    def __init__(self, provider: "AlsaCard"):
        self._provider = provider
        self._process: Optional[subprocess.Popen] = None
        self._stopped = threading.Event()
        self._lock = threading.Lock()

    def watch(self, callback: ChangeCallback) -> None:
        device = f"hw:{self._provider.card}"
        with self._lock:
            # stop() may already have run
            if self._stopped.is_set():
                return
            try:
                self._process = subprocess.Popen(
                    ["alsactl", "monitor", device],
                    stdout=subprocess.PIPE,
                    stderr=subprocess.STDOUT,
                    text=True,
                    bufsize=1,
                )
            except FileNotFoundError as e:
                raise HardwareIOError(
                    "alsactl not found",
                    original_error=str(e),
                    recovery_hint="Install alsa-utils.",
                ) from e
            process = self._process

        logger.debug(f"Watching control events on {device}")
        last_message = ""
        for line in process.stdout:
            if self._stopped.is_set():
                break
            event = parse_monitor_line(line)
            if event is None:
                if line.strip():
                    last_message = line.strip()
                continue
            numid, names = event
            if "VALUE" not in names:
                continue
            try:
                value = self._provider._cget(numid)
            except HardwareIOError as e:
                logger.warning(f"Could not read back control #{numid} after event: {e.technical_message}")
                continue
            callback(numid, value)

        returncode = process.wait()
        if self._stopped.is_set():
            return

        raise HardwareIOError(
            f"alsactl monitor exited (code {returncode})",
            original_error=last_message or None,
        )

    def stop(self) -> None:
        with self._lock:
            self._stopped.set()
            process = self._process

        if process and process.poll() is None:
            process.terminate()
            try:
                process.wait(timeout=1.0)
            except subprocess.TimeoutExpired:
                process.kill()


class AlsaCard:
    """
    Control provider for one ALSA card.

    Args:
        card: Card index (as in ``hw:N``)
    """

    def __init__(self, card: int):
        self._card = card
        self._catalog: Optional[dict[int, AlsaParameter]] = None

    @property
    def card(self) -> int:
        return self._card

    def _amixer(self, *args: str) -> str:
        command = ["amixer", "-c", str(self._card), *args]
        try:
            result = subprocess.run(command, capture_output=True, text=True, check=True)
        except FileNotFoundError as e:
            raise HardwareIOError(
                "amixer not found",
                original_error=str(e),
                card=self._card,
                recovery_hint="Install alsa-utils.",
            ) from e
        except subprocess.CalledProcessError as e:
            raise HardwareIOError(
                f"amixer {' '.join(args)} failed on card {self._card}",
                original_error=(e.stderr or "").strip() or None,
                card=self._card,
            ) from e
        return result.stdout

    def _load_catalog(self) -> dict[int, AlsaParameter]:
        if self._catalog is None:
            infos = parse_amixer_contents(self._amixer("contents"))
            self._catalog = {info.numid: AlsaParameter(self, info) for info in infos}
            logger.info(f"Card {self._card}: {len(self._catalog)} controls")
        return self._catalog

    def _cget(self, numid: int) -> int:
        infos = parse_amixer_contents(self._amixer("cget", f"numid={numid}"))
        if not infos or infos[0].value is None:
            raise HardwareIOError(f"No value reported for control #{numid}", card=self._card)
        return infos[0].value

    def _cset(self, numid: int, value: int) -> None:
        self._amixer("-q", "cset", f"numid={numid}", "--", str(value))

    def find_parameter(self, name: str) -> AlsaParameter:
        for parameter in self._load_catalog().values():
            if parameter.name == name:
                return parameter
        raise ParameterNotFoundError(name, card=self._card)

    def list_parameters(self) -> list[AlsaParameter]:
        return list(self._load_catalog().values())

    def subscribe(self) -> AlsaSubscription:
        return AlsaSubscription(self)

    def close(self) -> None:
        self._catalog = None

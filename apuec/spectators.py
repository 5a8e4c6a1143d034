"""Spectator registration, priority queueing and venue seating."""

from __future__ import annotations

import heapq
import itertools
import sys
import time
from dataclasses import dataclass
from typing import Callable, Iterator, TextIO

_PRIORITIES = {"VIP": 1, "Influencer": 2, "General": 3}

_CSV_HEADER = "Name,Email,Type,ArrivalTime,SeatSection,IsSeated\n"

_ROW_HEADER = (
    f"{'Name':<15}{'Email':<25}{'Type':<12}{'Priority':<10}"
    f"{'Seat Section':<15}{'Seated':<8}\n"
)

_MENU = (
    "\n" + "=" * 50 + "\n"
    "   APUEC SPECTATOR MANAGEMENT SYSTEM\n"
    + "=" * 50 + "\n"
    "1. Register New Spectator\n"
    "2. Allocate Seating (Process Queue)\n"
    "3. Display Waiting Queue\n"
    "4. Display Seated Spectators\n"
    "5. Display Venue Status\n"
    "6. Display System Statistics\n"
    "7. Save Data to File\n"
    "8. Load Data from File\n"
    "9. Exit System\n"
    + "-" * 50 + "\n"
    "Enter your choice (1-9): "
)


@dataclass
class Spectator:
    """A viewer waiting for, or holding, a seat at the venue.

    Types other than ``VIP`` and ``Influencer`` are stored as ``General``.
    A lower ``priority`` number means the spectator is served sooner.
    """

    name: str = ""
    email: str = ""
    spectator_type: str = "General"
    arrival_time: int = 0
    seat_section: str = ""
    is_seated: bool = False

    def __post_init__(self) -> None:
        if self.spectator_type not in _PRIORITIES:
            self.spectator_type = "General"

    @property
    def priority(self) -> int:
        return _PRIORITIES[self.spectator_type]

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.priority, self.arrival_time)

    def to_csv(self) -> str:
        """Return the spectator as one CSV record, without a line ending."""
        seated = "1" if self.is_seated else "0"
        return (
            f"{self.name},{self.email},{self.spectator_type},"
            f"{self.arrival_time},{self.seat_section},{seated}"
        )

    def format_row(self) -> str:
        """Return a fixed-width table row ending in a newline."""
        seated = "Yes" if self.is_seated else "No"
        return (
            f"{self.name:<15}{self.email:<25}{self.spectator_type:<12}"
            f"{self.priority:<10}{self.seat_section:<15}{seated:<8}\n"
        )


class SpectatorQueue:
    """Priority queue of spectators: by type first, then by earlier arrival."""

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, int, Spectator]] = []
        self._counter = itertools.count()

    def push(self, spectator: Spectator) -> None:
        priority, arrival = spectator.sort_key
        heapq.heappush(self._heap, (priority, arrival, next(self._counter), spectator))

    def pop(self) -> Spectator:
        if not self._heap:
            raise IndexError("Queue is empty!")
        return heapq.heappop(self._heap)[-1]

    def peek(self) -> Spectator:
        if not self._heap:
            raise IndexError("Queue is empty!")
        return self._heap[0][-1]

    def __len__(self) -> int:
        return len(self._heap)

    def __iter__(self) -> Iterator[Spectator]:
        """Yield spectators in storage order, not priority order."""
        return (entry[-1] for entry in self._heap)

    def in_priority_order(self) -> list[Spectator]:
        """Return the spectators in the order they would be served."""
        return [entry[-1] for entry in sorted(self._heap)]


def _read_line(reader: TextIO) -> str:
    line = reader.readline()
    if line == "":
        raise EOFError
    return line.rstrip("\r\n")


def _parse_int(text: str) -> int | None:
    try:
        return int(text.strip())
    except ValueError:
        return None


def _percent(used: int, capacity: int) -> float:
    return used / capacity * 100 if capacity else float("nan")


class SpectatorManager:
    """Venue with VIP, influencer and general sections and a waiting queue."""

    def __init__(self, vip: int = 20, influencer: int = 30, general: int = 100) -> None:
        self.vip_seats = vip
        self.influencer_seats = influencer
        self.general_seats = general
        self.vip_available = vip
        self.influencer_available = influencer
        self.general_available = general
        self.waiting = SpectatorQueue()
        self.seated: list[Spectator] = []

    @property
    def total_seats(self) -> int:
        return self.vip_seats + self.influencer_seats + self.general_seats

    @property
    def occupied_seats(self) -> int:
        return len(self.seated)

    def register(
        self,
        name: str,
        email: str,
        spectator_type: str,
        arrival_time: int | None = None,
    ) -> Spectator:
        """Add a spectator to the waiting queue, stamped with the current time by default."""
        if arrival_time is None:
            arrival_time = int(time.time())
        spectator = Spectator(name, email, spectator_type, arrival_time)
        self.waiting.push(spectator)
        return spectator

    def has_available_seats(self, spectator_type: str) -> bool:
        if spectator_type == "VIP":
            return self.vip_available > 0
        if spectator_type == "Influencer":
            return self.influencer_available > 0 or self.general_available > 0
        return self.general_available > 0

    def assign_seat_section(self, spectator_type: str) -> str:
        """Take one seat for the given type and return its label.

        Influencers fall back to general seating when their section is full.
        Raises ValueError when no seat is left for the type.
        """
        if spectator_type == "VIP" and self.vip_available > 0:
            self.vip_available -= 1
            return f"VIP-{self.vip_seats - self.vip_available}"
        if spectator_type == "Influencer":
            if self.influencer_available > 0:
                self.influencer_available -= 1
                return f"INF-{self.influencer_seats - self.influencer_available}"
            if self.general_available > 0:
                self.general_available -= 1
                return f"GEN-{self.general_seats - self.general_available}"
        elif spectator_type == "General" and self.general_available > 0:
            self.general_available -= 1
            return f"GEN-{self.general_seats - self.general_available}"
        raise ValueError(f"no seat available for {spectator_type} spectator")

    def allocate_seating(self) -> list[Spectator]:
        """Seat spectators in priority order until the queue empties or the head cannot be seated."""
        allocated: list[Spectator] = []
        while self.waiting:
            head = self.waiting.peek()
            if not self.has_available_seats(head.spectator_type):
                break
            spectator = self.waiting.pop()
            spectator.seat_section = self.assign_seat_section(spectator.spectator_type)
            spectator.is_seated = True
            self.seated.append(spectator)
            allocated.append(spectator)
        return allocated

    def _render_queue(self) -> str:
        if not self.waiting:
            return "No spectators in waiting queue.\n"
        rows = "".join(s.format_row() for s in self.waiting)
        return "\n=== WAITING QUEUE ===\n" + _ROW_HEADER + "-" * 85 + "\n" + rows

    def render_waiting_queue(self) -> str:
        return (
            "\n=== CURRENT WAITING QUEUE ===\n"
            + self._render_queue()
            + f"\nQueue size: {len(self.waiting)} spectators\n"
        )

    def render_seated(self) -> str:
        if not self.seated:
            return "No spectators currently seated.\n"
        header = f"{'Name':<15}{'Email':<25}{'Type':<12}{'Seat Section':<15}\n"
        rows = "".join(s.format_row() for s in self.seated)
        return (
            "\n=== SEATED SPECTATORS ===\n"
            + header
            + "-" * 67
            + "\n"
            + rows
            + f"\nTotal seated: {self.occupied_seats} spectators\n"
        )

    def render_venue_status(self) -> str:
        sections = (
            ("VIP", self.vip_seats, self.vip_available),
            ("Influencer", self.influencer_seats, self.influencer_available),
            ("General", self.general_seats, self.general_available),
        )
        lines = ["\n=== VENUE STATUS ===\n"]
        for label, capacity, available in sections:
            lines.append(
                f"{label} Seats: {capacity - available}/{capacity} "
                f"occupied ({available} available)\n"
            )
        lines.append("-" * 50 + "\n")
        lines.append(
            f"TOTAL: {self.occupied_seats}/{self.total_seats} occupied "
            f"({self.total_seats - self.occupied_seats} available)\n"
        )
        lines.append(f"Queue Length: {len(self.waiting)} waiting\n")
        return "".join(lines)

    def render_statistics(self) -> str:
        counts = {"VIP": 0, "Influencer": 0, "General": 0}
        for spectator in self.seated:
            counts[spectator.spectator_type] += 1
        vip = _percent(self.vip_seats - self.vip_available, self.vip_seats)
        inf = _percent(self.influencer_seats - self.influencer_available, self.influencer_seats)
        gen = _percent(self.general_seats - self.general_available, self.general_seats)
        overall = _percent(self.occupied_seats, self.total_seats)
        waiting = len(self.waiting)
        return (
            "\n=== SYSTEM STATISTICS ===\n"
            "Seat Utilization:\n"
            f"- VIP: {vip:.1f}% ({counts['VIP']} seated)\n"
            f"- Influencer: {inf:.1f}% ({counts['Influencer']} seated)\n"
            f"- General: {gen:.1f}% ({counts['General']} seated)\n"
            f"- Overall: {overall:.1f}% ({self.occupied_seats}/{self.total_seats})\n"
            "\nQueue Status:\n"
            f"- Waiting spectators: {waiting}\n"
            f"- Queue capacity utilization: {'Active' if waiting else 'Empty'}\n"
        )

    def save(self, path) -> None:
        """Write the seated spectators to a CSV file."""
        with open(path, "w", encoding="utf-8") as handle:
            handle.write(_CSV_HEADER)
            for spectator in self.seated:
                handle.write(spectator.to_csv() + "\n")

    def load(self, path) -> int:
        """Read spectators from a CSV file and return how many records were read.

        Seated records take a seat while the venue has room; the rest join
        the waiting queue. Raises ValueError on a bad arrival time.
        """
        loaded = 0
        with open(path, encoding="utf-8") as handle:
            handle.readline()
            for raw in handle:
                line = raw.rstrip("\n")
                if not line:
                    continue
                fields = (line.split(",") + [""] * 6)[:6]
                name, email, type_name, arrival_text, section, seated_text = fields
                spectator = Spectator(name, email, type_name, int(arrival_text))
                if seated_text == "1" and section:
                    spectator.seat_section = section
                    spectator.is_seated = True
                    if self.occupied_seats < self.total_seats:
                        self.seated.append(spectator)
                        if type_name == "VIP":
                            self.vip_available -= 1
                        elif type_name == "Influencer":
                            self.influencer_available -= 1
                        else:
                            self.general_available -= 1
                else:
                    self.waiting.push(spectator)
                loaded += 1
        return loaded

    def _render_allocation(self, allocated: list[Spectator]) -> str:
        lines = ["\n=== SEAT ALLOCATION PROCESS ===\n"]
        for spectator in allocated:
            lines.append(
                f"✓ Allocated seat to: {spectator.name} (Type: {spectator.spectator_type}, "
                f"Section: {spectator.seat_section})\n"
            )
        if self.waiting:
            head = self.waiting.peek()
            lines.append(
                f"✗ No available seats for {head.spectator_type} spectator: {head.name}\n"
            )
        lines.append(
            "\nAllocation Summary:\n"
            f"- Total allocated: {len(allocated)} spectators\n"
            f"- Remaining in queue: {len(self.waiting)} spectators\n"
            f"- Total seated: {self.occupied_seats}/{self.total_seats} seats\n"
        )
        return "".join(lines)

    def _interactive_register(self, reader: TextIO, writer: TextIO) -> None:
        writer.write("\n=== SPECTATOR REGISTRATION ===\nEnter name: ")
        name = _read_line(reader)
        writer.write("Enter email: ")
        email = _read_line(reader)
        writer.write(
            "Select spectator type:\n1. VIP\n2. Influencer\n3. General\nEnter choice (1-3): "
        )
        choice = _parse_int(_read_line(reader))
        type_name = {1: "VIP", 2: "Influencer", 3: "General"}.get(choice)
        if type_name is None:
            writer.write("Invalid choice. Defaulting to General.\n")
            type_name = "General"
        self.register(name, email, type_name)
        writer.write(
            "\nSpectator registered successfully!\n"
            f"Name: {name}\nType: {type_name}\n"
            f"Position in queue: {len(self.waiting)}\n"
        )

    def _interactive_allocate(self, reader: TextIO, writer: TextIO) -> None:
        if not self.waiting:
            writer.write("No spectators in waiting queue.\n")
            return
        writer.write(self._render_allocation(self.allocate_seating()))

    def _read_filename(self, reader: TextIO, writer: TextIO, action: str) -> str:
        writer.write(f"Enter filename to {action} (e.g., spectators.csv): ")
        tokens = _read_line(reader).split()
        return tokens[0] if tokens else ""

    def _interactive_save(self, reader: TextIO, writer: TextIO) -> None:
        filename = self._read_filename(reader, writer, "save")
        try:
            self.save(filename)
        except OSError:
            writer.write(f"Error: Unable to create file {filename}\n")
            return
        writer.write(f"Data saved to {filename} successfully!\n")

    def _interactive_load(self, reader: TextIO, writer: TextIO) -> None:
        filename = self._read_filename(reader, writer, "load")
        try:
            count = self.load(filename)
        except OSError:
            writer.write(f"Error: Unable to open file {filename}\n")
            return
        writer.write(
            f"Loaded {count} spectators from {filename}\n"
            f"- Seated: {self.occupied_seats}\n"
            f"- In queue: {len(self.waiting)}\n"
        )

    def _handlers(self) -> dict[int, Callable[[TextIO, TextIO], None]]:
        def show(render: Callable[[], str]) -> Callable[[TextIO, TextIO], None]:
            return lambda reader, writer: writer.write(render())

        return {
            1: self._interactive_register,
            2: self._interactive_allocate,
            3: show(self.render_waiting_queue),
            4: show(self.render_seated),
            5: show(self.render_venue_status),
            6: show(self.render_statistics),
            7: self._interactive_save,
            8: self._interactive_load,
        }

    def run(self, reader: TextIO | None = None, writer: TextIO | None = None) -> None:
        """Run the interactive menu until the user exits or input ends."""
        reader = reader if reader is not None else sys.stdin
        writer = writer if writer is not None else sys.stdout
        writer.write(
            "Welcome to APUEC Spectator Management System!\n"
            f"Venue Capacity: {self.total_seats} seats (VIP: {self.vip_seats}, "
            f"Influencer: {self.influencer_seats}, General: {self.general_seats})\n"
        )
        handlers = self._handlers()
        try:
            while True:
                writer.write(_MENU)
                choice = _parse_int(_read_line(reader))
                if choice == 9:
                    writer.write("Thank you for using APUEC Spectator Management System!\n")
                    return
                handler = handlers.get(choice)
                if handler is None:
                    writer.write("Invalid choice! Please enter 1-9.\n")
                else:
                    handler(reader, writer)
                writer.write("\nPress Enter to continue...")
                _read_line(reader)
        except EOFError:
            return
#!/usr/bin/env python3
"""Interactive front desk menu for the clinic workflow service."""

import sys

import httpx
from rich.console import Console
from rich.panel import Panel
from rich.prompt import IntPrompt, Prompt
from rich.table import Table

MENU = """1. View patients in waiting room
2. Pass patients to attention
3. View patients in attention
4. Search patient by ID
5. Process patients (create receipt)
6. Exit"""


class ClinicCLI:
    """Numbered menu that issues one workflow command at a time."""

    def __init__(self, base_url: str = "http://localhost:8000"):
        """Initialize clinic CLI."""
        self.base_url = base_url
        self.console = Console()
        self.client = httpx.Client(base_url=base_url, timeout=30.0)

    def start(self) -> None:
        """Run the menu until the user exits."""
        self.console.print(Panel.fit("[bold blue]Welcome to Le Clinik![/bold blue]", border_style="blue"))

        if not self._test_connection():
            self.console.print(f"[red]Cannot connect to the clinic service at {self.base_url}.[/red]")
            return

        actions = {
            1: lambda: self._view_queue("waiting"),
            2: self._pass_patients,
            3: lambda: self._view_queue("attention"),
            4: self._search,
            5: self._process_patients,
        }

        try:
            while True:
                self.console.print(Panel(MENU, title="Type a number and press 'Enter'", border_style="cyan"))
                option = IntPrompt.ask("Choose an option")

                if option == 6:
                    break
                action = actions.get(option)
                if action is None:
                    self.console.print("[red]Enter a valid option (1-6).[/red]")
                    continue

                try:
                    action()
                except httpx.HTTPError as e:
                    self.console.print(f"[red]Connection error: {e}[/red]")

        except KeyboardInterrupt:
            pass
        finally:
            self.console.print("\n[yellow]Goodbye![/yellow]")
            self.client.close()

    def _test_connection(self) -> bool:
        """Test connection to the service."""
        try:
            response = self.client.get("/health")
            return response.status_code == 200
        except httpx.HTTPError:
            return False

    def _report_error(self, response: httpx.Response) -> bool:
        """Print an API error; returns True if the response was an error."""
        if response.is_success:
            return False
        detail = response.json().get("detail", response.text)
        self.console.print(f"[red]{detail}[/red]")
        return True

    def _view_queue(self, which: str) -> None:
        response = self.client.get(f"/queues/{which}")
        if self._report_error(response):
            return

        data = response.json()
        title = "Waiting Room" if which == "waiting" else "Being Attended"
        table = Table(title=f"{title} ({data['size']})")
        for column in ("Names", "Reason", "Check-in", "Age"):
            table.add_column(column)
        for patient in data["patients"]:
            table.add_row(patient["names"], patient["reason"], patient["check_in"], str(patient["age"]))
        self.console.print(table)

    def _pass_patients(self) -> None:
        count = IntPrompt.ask("How many patients do you want to pass to attention?")
        response = self.client.post("/queues/pass", json={"count": count})
        if self._report_error(response):
            return

        data = response.json()
        for patient in data["patients"]:
            self.console.print(f"Passing: {patient['names']} | {patient['reason']} | Check-in: {patient['check_in']}")
        if data["shortfall"]:
            self.console.print(f"[yellow]Only {data['moved']} patient(s) available to pass.[/yellow]")

    def _search(self) -> None:
        patient_id = Prompt.ask("Type the ID").strip()
        response = self.client.get(f"/patients/{patient_id}", params={"include_attention": True})
        if self._report_error(response):
            return

        data = response.json()
        if not data["found"]:
            self.console.print(f"No patient with ID {patient_id} found.")
            return
        for match in data["matches"]:
            where = "Waiting" if match["queue"] == "waiting" else "Attention"
            self.console.print(f"Found in {where}: {match['summary']}")

    def _process_patients(self) -> None:
        count = IntPrompt.ask("How many patients to process (charge and remove from attention)?")
        response = self.client.post("/receipts", json={"count": count})
        if self._report_error(response):
            return

        data = response.json()
        self.console.print(f"[green]{data['message']}[/green]")


def main():
    """Main entry point for the clinic CLI."""
    base_url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8000"

    cli = ClinicCLI(base_url)
    cli.start()


if __name__ == "__main__":
    main()

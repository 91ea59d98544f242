from __future__ import annotations

import sys

from django.core.management.base import BaseCommand

from apps.bookings.bootstrap import bootstrap
from apps.bookings.shell import RentalsShell, run_demo, seed_demo_data


class Command(BaseCommand):
    help = "Interactive shell over the room booking lifecycle (in-memory, seeded with demo data)"
    stealth_options = ("stdin",)

    def add_arguments(self, parser):
        parser.add_argument(
            "--demo",
            action="store_true",
            help="Run the scripted request/accept/conflict demo and exit",
        )
        parser.add_argument(
            "--no-seed",
            action="store_true",
            help="Start with empty users and listings",
        )

    def handle(self, *args, **options):
        system = bootstrap()
        shell = RentalsShell(system, self.stdout)

        if options["no_seed"] and options["demo"]:
            self.stderr.write(self.style.ERROR("--demo needs the seeded demo data"))
            return

        if not options["no_seed"]:
            actors = seed_demo_data(system)
            self.stdout.write(self.style.SUCCESS(
                f"Seeded: student {actors['student'].id}, homeowner {actors['homeowner'].id}, "
                f"admin {actors['admin'].id}, room {actors['room'].id}"
            ))
            if options["demo"]:
                run_demo(shell, actors)
                return

        shell.write("Type 'help' for the list of commands.")
        shell.run(options.get("stdin") or sys.stdin)

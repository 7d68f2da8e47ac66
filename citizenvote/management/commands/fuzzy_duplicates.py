"""
Django management command listing voters that share a name and birth date.
"""

import csv

from django.core.management.base import BaseCommand

from citizenvote.services import DuplicateReviewService


class Command(BaseCommand):
    help = "List voter groups with identical full name and date of birth"

    def add_arguments(self, parser):
        parser.add_argument(
            "--format",
            choices=["text", "csv"],
            default="text",
            help="Output format (default: text)",
        )
        parser.add_argument(
            "--min-count",
            type=int,
            default=2,
            help="Only show groups with at least this many voters",
        )

    def handle(self, *args, **options):
        groups = [
            group
            for group in DuplicateReviewService().list_fuzzy_duplicates()
            if group.count >= options["min_count"]
        ]

        if options["format"] == "csv":
            writer = csv.writer(self.stdout)
            writer.writerow(["full_name", "dob", "cnt", "candidate_ids"])
            for group in groups:
                writer.writerow(
                    [
                        group.full_name,
                        group.dob.isoformat(),
                        group.count,
                        group.candidate_ids_display(),
                    ]
                )
            return

        if not groups:
            self.stdout.write(self.style.SUCCESS("No fuzzy duplicates found."))
            return

        for group in groups:
            self.stdout.write(
                f"{group.full_name}\t{group.dob.isoformat()}\t"
                f"{group.count}\tcandidates: {group.candidate_ids_display()}"
            )
        self.stdout.write(
            self.style.WARNING(f"\n{len(groups)} group(s) need review.")
        )

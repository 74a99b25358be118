"""
Guest data export (CSV and Excel)
"""

import csv
import io
from typing import List, Mapping

import pandas as pd

from oscar_party.schemas.category import Category
from oscar_party.schemas.guest import Guest
from oscar_party.services.scoring import score_guest

class ExportService:
    """Service for exporting the guest list with ballots and scores"""

    BASE_COLUMNS = [
        'Name', 'RSVP', 'Party ID', 'Party Host', 'Dietary',
        'Ballot Submitted', 'Submitted At', 'Score',
    ]

    @staticmethod
    def build_frame(
        guests: List[Guest],
        categories: List[Category],
        winners: Mapping[str, str]
    ) -> pd.DataFrame:
        """One row per guest, one prediction column per category"""
        category_names = [c.name for c in categories]
        rows = []
        for guest in guests:
            rows.append([
                guest.name,
                guest.rsvp.value,
                guest.party_id or '',
                'Yes' if guest.is_party_host else '',
                guest.dietary or '',
                'Yes' if guest.ballot_submitted else 'No',
                guest.submitted_at or '',
                str(score_guest(guest, winners)),
                *[guest.predictions.get(name, '') for name in category_names],
            ])

        # Duplicate category names would collapse dict-based columns, so build positionally
        return pd.DataFrame(rows, columns=ExportService.BASE_COLUMNS + category_names, dtype=object)

    @staticmethod
    def export_csv(
        guests: List[Guest],
        categories: List[Category],
        winners: Mapping[str, str]
    ) -> str:
        """Every field double-quoted, inner quotes doubled, rows joined by newlines"""
        df = ExportService.build_frame(guests, categories, winners)
        text = df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator='\n')
        return text[:-1] if text.endswith('\n') else text

    @staticmethod
    def export_xlsx(
        guests: List[Guest],
        categories: List[Category],
        winners: Mapping[str, str]
    ) -> bytes:
        df = ExportService.build_frame(guests, categories, winners)

        buffer = io.BytesIO()
        with pd.ExcelWriter(buffer, engine='openpyxl') as writer:
            df.to_excel(writer, index=False, sheet_name='Guest List')

        return buffer.getvalue()

from __future__ import annotations

import csv
import io
from typing import Iterable, Mapping, Sequence

from openpyxl import Workbook
from openpyxl.utils import get_column_letter

from kbase.imports.models import ImportRowError
from kbase.imports.parsers import TEMPLATE_COLUMNS
from kbase.models import KnowledgeItem

TEMPLATE_CSV_FILENAME = "knowledge_base_template.csv"
TEMPLATE_XLSX_FILENAME = "knowledge_base_template.xlsx"
EXPORT_CSV_FILENAME = "knowledge_base_export.csv"
EXPORT_XLSX_FILENAME = "knowledge_base_export.xlsx"
ERROR_REPORT_FILENAME = "import_errors.csv"

XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

ERROR_REPORT_HEADERS = ("Row Number", "Error Message")

# Widths for question, answer, category, subcategory, keywords, image, video.
COLUMN_WIDTHS = (40, 60, 15, 15, 30, 40, 40)

SAMPLE_ROW = {
    "question": "How do I reset my password?",
    "answer": (
        'Click "Forgot Password" on the login page and follow the instructions '
        "sent to your email."
    ),
    "category": "Account",
    "subcategory": "Security",
    "keywords": "password reset security login",
    "image": "",
    "video": "",
}


def build_csv_content(headers: Sequence[str], rows: Iterable[Mapping[str, object]]) -> str:
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=list(headers))
    writer.writeheader()
    for row in rows:
        writer.writerow(
            {key: "" if row.get(key) is None else row.get(key) for key in headers}
        )
    return buffer.getvalue()


def build_xlsx_content(
    sheet_title: str, headers: Sequence[str], rows: Iterable[Mapping[str, object]]
) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_title
    sheet.append(list(headers))
    for row in rows:
        sheet.append(["" if row.get(key) is None else row.get(key) for key in headers])
    for position, width in enumerate(COLUMN_WIDTHS[: len(headers)], start=1):
        sheet.column_dimensions[get_column_letter(position)].width = width
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def build_csv_template() -> str:
    return build_csv_content(TEMPLATE_COLUMNS, [SAMPLE_ROW])


def build_xlsx_template() -> bytes:
    return build_xlsx_content("Template", TEMPLATE_COLUMNS, [SAMPLE_ROW])


def knowledge_item_rows(items: Iterable[KnowledgeItem]) -> list[dict[str, object]]:
    return [{column: getattr(item, column) for column in TEMPLATE_COLUMNS} for item in items]


def export_items_csv(items: Iterable[KnowledgeItem]) -> str:
    return build_csv_content(TEMPLATE_COLUMNS, knowledge_item_rows(items))


def export_items_xlsx(items: Iterable[KnowledgeItem]) -> bytes:
    return build_xlsx_content("Knowledge Base", TEMPLATE_COLUMNS, knowledge_item_rows(items))


def build_error_report_csv(errors: Iterable[ImportRowError]) -> str:
    row_header, message_header = ERROR_REPORT_HEADERS
    return build_csv_content(
        ERROR_REPORT_HEADERS,
        [{row_header: error.row, message_header: error.message} for error in errors],
    )

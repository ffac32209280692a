"""
Export service for generating CSV and Excel exports of project tasks.

Tasks are flattened to one row each and written through pandas; Excel files
use the openpyxl engine.
"""

import logging
from datetime import datetime
from io import BytesIO
from typing import Any

import pandas as pd
from django.db.models import QuerySet

logger = logging.getLogger(__name__)


class ExportConfig:
    """Export-specific configuration constants."""

    MAX_EXPORT_RECORDS: int = 10000
    """Maximum records to export (prevent memory issues)."""

    CSV_ENCODING: str = 'utf-8-sig'
    """UTF-8 with BOM for Excel compatibility."""

    COLUMNS: list[str] = [
        'task_id',
        'title',
        'description',
        'project_id',
        'team_id',
        'assigned_to',
        'deadline',
        'status',
        'created_at',
        'updated_at',
    ]
    """Column order for CSV/Excel export."""

    SHEET_NAME: str = 'Tasks'
    EXCEL_ENGINE: str = 'openpyxl'
    MAX_COLUMN_WIDTH: int = 50

    DEFAULT_EXPORT_FORMAT: str = 'csv'
    ALLOWED_EXPORT_FORMATS: list[str] = ['csv', 'xlsx']


class TaskExportService:
    """Export a queryset of tasks to CSV or XLSX bytes."""

    @staticmethod
    def prepare_export_data(queryset: QuerySet) -> list[dict[str, Any]]:
        """
        Convert tasks to a list of flat dictionaries.

        Assignees are joined into one ``;`` separated cell. At most
        ``ExportConfig.MAX_EXPORT_RECORDS`` rows are produced.
        """
        export_data = []

        for task in queryset.prefetch_related('assigned_to')[: ExportConfig.MAX_EXPORT_RECORDS]:
            export_data.append(
                {
                    'task_id': task.task_id,
                    'title': task.title,
                    'description': task.description or '',
                    'project_id': task.project_id,
                    'team_id': task.team_id,
                    'assigned_to': ';'.join(task.assignee_ids()),
                    'deadline': task.deadline.isoformat() if task.deadline else '',
                    'status': task.status,
                    'created_at': task.created_at.isoformat() if task.created_at else '',
                    'updated_at': task.updated_at.isoformat() if task.updated_at else '',
                }
            )

        if len(export_data) >= ExportConfig.MAX_EXPORT_RECORDS:
            logger.warning(f'Export limit reached: {ExportConfig.MAX_EXPORT_RECORDS} records')

        return export_data

    @classmethod
    def _to_dataframe(cls, queryset: QuerySet) -> pd.DataFrame:
        export_data = cls.prepare_export_data(queryset)
        if not export_data:
            return pd.DataFrame(columns=ExportConfig.COLUMNS)
        return pd.DataFrame(export_data)[ExportConfig.COLUMNS]

    @classmethod
    def export_to_csv(cls, queryset: QuerySet) -> bytes:
        try:
            df = cls._to_dataframe(queryset)
            output = BytesIO()
            df.to_csv(output, index=False, encoding=ExportConfig.CSV_ENCODING)
            return output.getvalue()
        except Exception as e:
            logger.error(f'Error generating CSV export: {str(e)}')
            raise

    @classmethod
    def export_to_excel(cls, queryset: QuerySet) -> bytes:
        try:
            df = cls._to_dataframe(queryset)
            output = BytesIO()

            engine: str = ExportConfig.EXCEL_ENGINE
            with pd.ExcelWriter(output, engine=engine) as writer:  # type: ignore[arg-type]
                df.to_excel(
                    writer,
                    sheet_name=ExportConfig.SHEET_NAME,
                    index=False,
                    freeze_panes=(1, 0),
                )
                cls._adjust_excel_column_widths(writer.sheets[ExportConfig.SHEET_NAME], df)

            return output.getvalue()
        except Exception as e:
            logger.error(f'Error generating Excel export: {str(e)}')
            raise

    @staticmethod
    def _adjust_excel_column_widths(worksheet, df: pd.DataFrame) -> None:
        from openpyxl.utils import get_column_letter

        for idx, column in enumerate(df.columns, start=1):
            max_length = df[column].astype(str).map(len).max() if not df.empty else 0
            width = min(max(max_length, len(column)) + 2, ExportConfig.MAX_COLUMN_WIDTH)
            worksheet.column_dimensions[get_column_letter(idx)].width = width

    @classmethod
    def export(cls, queryset: QuerySet, format: str) -> bytes:
        if format == 'xlsx':
            return cls.export_to_excel(queryset)
        return cls.export_to_csv(queryset)

    @staticmethod
    def generate_export_filename(project_id: str, format: str) -> str:
        """Example: Project-00001_tasks_20261019_143022.csv"""
        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        extension = 'xlsx' if format == 'xlsx' else 'csv'
        return f'{project_id}_tasks_{timestamp}.{extension}'

    @staticmethod
    def get_content_type(format: str) -> str:
        if format == 'xlsx':
            return 'application/vnd.openxmlformats-officedocument.spreadsheetml.sheet'
        return 'text/csv; charset=utf-8'

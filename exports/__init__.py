from .writers import summary_frame, write_projection_excel, write_snapshots_csv

__all__ = ["summary_frame", "write_projection_excel", "write_snapshots_csv"]

"""Report configuration, assembly and document contract.

Use explicit imports:
    from reporting.reports.config import ReportConfig, load_report_config
    from reporting.reports.contract import ReportDocument, ExtractedField
    from reporting.reports.assembler import ReportAssembler, assemble_report
"""

__all__ = [
    # Config
    "ReportConfig",
    "SectionSpec",
    "FieldSpec",
    "ClassificationSpec",
    "ClassificationRange",
    "load_report_config",
    # Contract
    "ReportDocument",
    "ReportSection",
    "ExtractedField",
    # Assembler
    "ReportAssembler",
    "assemble_report",
]

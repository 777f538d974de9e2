"""Report generation, preview and artifact endpoints."""

from pathlib import Path

import structlog
from fastapi import APIRouter, Query, status
from fastapi.responses import FileResponse

from api.deps import ReportGeneratorDep
from api.exceptions import NotFoundError
from api.schemas.report import (
    ArtifactRead,
    ConfigDetailRead,
    ConfigSummaryRead,
    GenerateReportRequest,
    PreviewRead,
    SessionDetailRead,
    SessionSummaryRead,
)
from api.schemas.responses import ERROR_RESPONSES, SuccessResponse, list_meta
from reporting.pipeline import ConfigSummary
from reporting.sources.sessions import ASSESSMENT_ID_KEY

router = APIRouter(prefix="/reports", tags=["reports"], responses=ERROR_RESPONSES)
logger = structlog.get_logger(__name__)

MEDIA_TYPES = {
    "pdf": "application/pdf",
    "html": "text/html",
}


async def _generate(generator: ReportGeneratorDep, session_id: str) -> SuccessResponse[ArtifactRead]:
    artifact = await generator.generate(session_id)
    return SuccessResponse(
        data=ArtifactRead.from_artifact(artifact),
        meta={"message": "Report generated successfully"},
    )


@router.post(
    "/generate",
    response_model=SuccessResponse[ArtifactRead],
    status_code=status.HTTP_201_CREATED,
)
async def generate_report(
    body: GenerateReportRequest,
    generator: ReportGeneratorDep,
) -> SuccessResponse[ArtifactRead]:
    """Generate a report artifact for a session."""
    return await _generate(generator, body.session_id)


@router.get(
    "/generate/{session_id}",
    response_model=SuccessResponse[ArtifactRead],
    status_code=status.HTTP_201_CREATED,
)
async def generate_report_for_session(
    session_id: str,
    generator: ReportGeneratorDep,
) -> SuccessResponse[ArtifactRead]:
    """Generate a report artifact for a session given in the path."""
    return await _generate(generator, session_id)


@router.get("/sessions", response_model=SuccessResponse[list[SessionSummaryRead]])
async def list_sessions(generator: ReportGeneratorDep) -> SuccessResponse[list[SessionSummaryRead]]:
    """List stored assessment sessions."""
    sessions = [SessionSummaryRead.from_summary(s) for s in generator.list_sessions()]
    return SuccessResponse(data=sessions, meta=list_meta(sessions))


@router.get("/sessions/{session_id}", response_model=SuccessResponse[SessionDetailRead])
async def get_session(
    session_id: str,
    generator: ReportGeneratorDep,
) -> SuccessResponse[SessionDetailRead]:
    """Get a session record and whether a report configuration exists for it."""
    detail = generator.get_session(session_id)
    return SuccessResponse(data=SessionDetailRead(**detail.to_dict()))


@router.get("/configs", response_model=None)
async def get_configs(
    generator: ReportGeneratorDep,
    assessment_id: str | None = Query(None, description="Return a single configuration"),
) -> SuccessResponse[ConfigDetailRead] | SuccessResponse[list[ConfigSummaryRead]]:
    """List configuration summaries, or return one configuration in full."""
    if assessment_id:
        config = generator.get_config(assessment_id)
        return SuccessResponse(
            data=ConfigDetailRead(assessment_id=assessment_id, config=config.to_dict())
        )

    summaries = [ConfigSummaryRead.from_summary(s) for s in generator.summarize_configs()]
    return SuccessResponse(data=summaries, meta=list_meta(summaries))


@router.get("/artifacts", response_model=SuccessResponse[list[ArtifactRead]])
async def list_artifacts(generator: ReportGeneratorDep) -> SuccessResponse[list[ArtifactRead]]:
    """List generated report artifacts, newest first."""
    artifacts = [ArtifactRead.from_artifact(a) for a in generator.list_artifacts()]
    return SuccessResponse(data=artifacts, meta=list_meta(artifacts))


@router.get("/artifacts/{filename}")
async def download_artifact(filename: str, generator: ReportGeneratorDep) -> FileResponse:
    """Download a generated report artifact."""
    artifact = generator.store.locate(filename)
    if artifact is None or not Path(artifact.path).is_file():
        raise NotFoundError("Artifact", filename)

    extension = filename.rsplit(".", 1)[-1].lower()
    return FileResponse(
        artifact.path,
        media_type=MEDIA_TYPES.get(extension, "application/octet-stream"),
        filename=artifact.filename,
    )


@router.get("/preview", response_model=SuccessResponse[PreviewRead])
async def preview_report(
    generator: ReportGeneratorDep,
    session_id: str = Query(..., min_length=1, description="Session to assemble"),
) -> SuccessResponse[PreviewRead]:
    """Assemble a session's report without rendering it (configuration dry run)."""
    document = generator.preview_assembly(session_id)
    detail = generator.get_session(session_id)
    assessment_id = str(detail.session.get(ASSESSMENT_ID_KEY))
    config = generator.get_config(assessment_id)

    logger.info(
        "report_previewed",
        session_id=session_id,
        unresolved=document.unresolved_count,
    )
    return SuccessResponse(
        data=PreviewRead(
            session_id=session_id,
            assessment_id=assessment_id,
            data_keys=list(detail.session.keys()),
            configuration=ConfigSummaryRead.from_summary(
                ConfigSummary.from_config(assessment_id, config)
            ),
            document=document.to_dict(),
            unresolved_fields=document.unresolved_count,
        ),
        meta={"message": "Configuration test successful"},
    )

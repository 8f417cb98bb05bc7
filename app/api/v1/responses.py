"""Response helpers shared by several routers."""

from fastapi.responses import JSONResponse, Response

from app.application.dtos.email import EmailOutcome
from app.application.interfaces.services import RenderedPdf
from app.schemas.email import SendEmailErrorResponse, SendEmailResponse


def email_outcome_response(outcome: EmailOutcome) -> JSONResponse:
    """200 on success, 400 when the provider rejected the email, 500 otherwise."""
    if outcome.success:
        return JSONResponse(
            status_code=200,
            content=SendEmailResponse.model_validate(outcome).model_dump(),
        )
    body = SendEmailErrorResponse(error=outcome.error or outcome.message).model_dump()
    return JSONResponse(status_code=400 if outcome.provider_error else 500, content=body)


def pdf_response(pdf: RenderedPdf) -> Response:
    """Rendered PDF as a download."""
    return Response(
        content=pdf.content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{pdf.filename}"'},
    )

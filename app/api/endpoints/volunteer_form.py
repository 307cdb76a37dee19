# app/api/endpoints/volunteer_form.py

from pathlib import Path

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

from app.api.deps import get_submission_pipeline
from app.core.config import settings
from app.core.constants import RECAPTCHA_FIELD
from app.core.rate_limiter import limiter
from app.models.enums import StatusType
from app.services.submission_pipeline import SubmissionPipeline
from app.views.volunteer_form import RecaptchaWidget, VolunteerFormView

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))

router = APIRouter(tags=["Volunteer Form"])


# ------------------------------------------------------------
# 1. RENDER EMPTY FORM
# ------------------------------------------------------------
@router.get("/", response_class=HTMLResponse)
async def show_form(request: Request):
    view = VolunteerFormView()
    return templates.TemplateResponse(request, "contact_form.html", view.context())


# ------------------------------------------------------------
# 2. SUBMIT
# ------------------------------------------------------------
@router.post("/", response_class=HTMLResponse)
@limiter.limit(settings.SUBMIT_RATE_LIMIT)
async def submit_form(
    request: Request,
    pipeline: SubmissionPipeline = Depends(get_submission_pipeline),
):
    data = await request.form()

    view = VolunteerFormView(form_session=data.get("formSession") or None)
    view.load_posted_fields(data)
    widget = RecaptchaWidget(data.get(RECAPTCHA_FIELD))

    outcome = await view.submit(pipeline, widget)

    if outcome.redirect_to:
        return RedirectResponse(outcome.redirect_to, status_code=status.HTTP_303_SEE_OTHER)

    code = status.HTTP_400_BAD_REQUEST if outcome.status.type == StatusType.Error else status.HTTP_200_OK
    return templates.TemplateResponse(request, "contact_form.html", view.context(), status_code=code)


# ------------------------------------------------------------
# 3. SUCCESS PAGE
# ------------------------------------------------------------
@router.get(settings.SUCCESS_PATH, response_class=HTMLResponse)
async def show_success(request: Request):
    return templates.TemplateResponse(request, "success.html", {})

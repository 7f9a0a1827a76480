from fastapi import APIRouter, Depends, HTTPException, Request
from starlette.datastructures import UploadFile
from campaign_analyzer.schemas.analysis import AnalysisResult, ErrorResponse, Submission
from campaign_analyzer.services.analysis_service import AnalysisService, get_analysis_service
import logging

logger = logging.getLogger(__name__)

router = APIRouter()

GENERIC_ERROR = "An error occurred while processing the request"


async def ler_submissao(request: Request) -> Submission:
    """
    Extrai imagem e brief do corpo multipart.
    Campos faltando ou repetidos geram 400.
    """
    # form lido à mão: File(...) responderia 422 e aceitaria campos repetidos
    try:
        form = await request.form()
    except Exception as e:
        logger.error(f"Erro ao ler formulário: {str(e)}")
        raise HTTPException(status_code=400, detail="Invalid form data")

    try:
        images = form.getlist("image")
        if len(images) != 1 or not isinstance(images[0], UploadFile):
            raise HTTPException(status_code=400, detail="Invalid file upload")
        image_file = images[0]

        briefs = form.getlist("brief")
        if len(briefs) != 1 or not isinstance(briefs[0], str) or not briefs[0]:
            raise HTTPException(status_code=400, detail="Invalid brief")

        image_bytes = await image_file.read()
        return Submission(
            image=image_bytes,
            brief=briefs[0],
            filename=image_file.filename,
            content_type=image_file.content_type,
        )
    finally:
        # remove os arquivos temporários do parser
        await form.close()


@router.post(
    "/analyze",
    name="analyze_campaign",
    response_model=AnalysisResult,
    responses={400: {"model": ErrorResponse}, 405: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def analyze_campaign(request: Request, service: AnalysisService = Depends(get_analysis_service)):
    """
    Analisa uma campanha de email (imagem + brief)
    """
    submission = await ler_submissao(request)
    logger.info(
        f"Submissão recebida: arquivo={submission.filename}, "
        f"bytes={len(submission.image)}, brief={len(submission.brief)} caracteres"
    )

    try:
        return await service.analyze(submission)
    except Exception as e:
        logger.error(f"Erro ao analisar campanha: {str(e)}")
        raise HTTPException(status_code=500, detail=GENERIC_ERROR)

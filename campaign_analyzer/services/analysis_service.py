import base64
import logging
from functools import lru_cache
from typing import Optional

from openai import AsyncOpenAI

from campaign_analyzer.core.config import Settings, get_settings
from campaign_analyzer.schemas.analysis import AnalysisResult, Submission

logger = logging.getLogger(__name__)

# -------------------------------------------------------------------
PROMPT_TEMPLATE = (
    "Analyze this email campaign image and provide: 1) Design Analysis, "
    "2) Copy Analysis, and 3) Campaign Outline. For the Campaign Outline, "
    "use the following structure: Section Name (e.g., Hero Section), Header:, "
    "Subheader:, Copy Blurb:, CTA:. The campaign brief is: {brief}"
)
DEFAULT_IMAGE_MIME = "image/jpeg"
SECTION_SEPARATOR = "\n\n"

MOCK_RESULT = AnalysisResult(
    designAnalysis="This is a mock design analysis.",
    copyAnalysis="This is a mock copy analysis.",
    campaignOutline="This is a mock campaign outline.",
)
# -------------------------------------------------------------------


class AnalysisError(Exception):
    """Base error for a failed campaign analysis."""


class EmptyProviderResponseError(AnalysisError):
    pass


def build_prompt(brief: str) -> str:
    return PROMPT_TEMPLATE.format(brief=brief)


def encode_image(image: bytes, content_type: Optional[str] = None) -> str:
    """
    Monta a data URL base64 enviada ao provedor.
    Tipos que não são image/* caem para image/jpeg.
    """
    mime = content_type if content_type and content_type.startswith("image/") else DEFAULT_IMAGE_MIME
    return f"data:{mime};base64,{base64.b64encode(image).decode('utf-8')}"


def split_sections(text: str) -> AnalysisResult:
    """
    Divide a resposta do modelo em blocos separados por linha em branco.
    Os três primeiros blocos viram designAnalysis, copyAnalysis e
    campaignOutline, nessa ordem. Blocos faltando ficam None e blocos
    extras são descartados.
    """
    parts = text.split(SECTION_SEPARATOR)
    logger.info(f"Resposta dividida em {len(parts)} bloco(s)")
    padded = parts[:3] + [None] * (3 - len(parts[:3]))
    design, copy, outline = padded
    return AnalysisResult(designAnalysis=design, copyAnalysis=copy, campaignOutline=outline)


class AnalysisService:
    def __init__(self, settings: Settings = None, openai_client: AsyncOpenAI = None):
        self.settings = settings or get_settings()
        self.model = self.settings.OPENAI_MODEL
        self.max_tokens = self.settings.OPENAI_MAX_TOKENS
        self.mock = self.settings.MOCK_ANALYSIS
        self._openai_client = openai_client

    @property
    def openai_client(self) -> AsyncOpenAI:
        if self._openai_client is None:
            self._openai_client = AsyncOpenAI(
                api_key=self.settings.OPENAI_API_KEY,
                base_url=self.settings.OPENAI_BASE_URL,
                max_retries=0,
            )
        return self._openai_client

    async def aclose(self):
        if self._openai_client is not None:
            await self._openai_client.close()
            self._openai_client = None

    def build_messages(self, submission: Submission) -> list:
        return [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": build_prompt(submission.brief)},
                    {
                        "type": "image_url",
                        "image_url": {"url": encode_image(submission.image, submission.content_type)},
                    },
                ],
            }
        ]

    async def analyze(self, submission: Submission) -> AnalysisResult:
        """
        Envia imagem + brief ao provedor e devolve as três seções.
        Uma única chamada, sem retry.
        """
        if self.mock:
            logger.info("MOCK_ANALYSIS ativo, retornando análise fixa")
            return MOCK_RESULT.model_copy()

        logger.info(f"Chamando provedor: model={self.model}, max_tokens={self.max_tokens}")
        response = await self.openai_client.chat.completions.create(
            model=self.model,
            messages=self.build_messages(submission),
            max_tokens=self.max_tokens,
        )

        content = None
        if response.choices:
            content = response.choices[0].message.content
        if not content:
            raise EmptyProviderResponseError("No result from the provider")

        return split_sections(content)


@lru_cache
def get_analysis_service() -> AnalysisService:
    # um cliente OpenAI por processo, fechado no shutdown do app
    return AnalysisService(get_settings())

import logging
import mimetypes
import os
import sys
from typing import Optional

import requests

from campaign_analyzer.schemas.analysis import AnalysisResult

logger = logging.getLogger(__name__)

MISSING_IMAGE_MESSAGE = "Please upload an image before submitting."
GENERIC_ERROR_MESSAGE = "An error occurred while analyzing the campaign. Please try again."


class MissingImageError(ValueError):
    pass


class AnalysisFailedError(Exception):
    pass


class AnalyzeClient:
    """
    Cliente do endpoint de análise, equivalente ao formulário da página.
    Qualquer falha vira a mesma mensagem genérica.
    """

    def __init__(self, base_url: str = "http://localhost:8000", timeout: Optional[float] = None, session=None):
        self.base_url = base_url.rstrip("/")
        self.analyze_url = f"{self.base_url}/api/analyze"
        self.timeout = timeout
        self.session = session or requests.Session()

    def analyze(self, image_path: Optional[str], brief: str) -> AnalysisResult:
        if not image_path or not os.path.isfile(image_path):
            raise MissingImageError(MISSING_IMAGE_MESSAGE)

        content_type = mimetypes.guess_type(image_path)[0] or "application/octet-stream"
        try:
            with open(image_path, "rb") as image:
                files = {"image": (os.path.basename(image_path), image, content_type)}
                response = self.session.post(
                    self.analyze_url, files=files, data={"brief": brief}, timeout=self.timeout
                )
            response.raise_for_status()
            return AnalysisResult(**response.json())
        except (requests.exceptions.RequestException, ValueError, TypeError) as e:
            logger.error(f"Erro na requisição: {str(e)}")
            raise AnalysisFailedError(GENERIC_ERROR_MESSAGE) from e


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if len(argv) < 2:
        print("Usage: python -m campaign_analyzer.utils.analyze_client IMAGE BRIEF [BASE_URL]")
        return 2

    client = AnalyzeClient(argv[2]) if len(argv) > 2 else AnalyzeClient()
    try:
        result = client.analyze(argv[0], argv[1])
    except (MissingImageError, AnalysisFailedError) as e:
        print(f"Error: {e}")
        return 1

    for title, text in (
        ("Design Analysis", result.designAnalysis),
        ("Copy Analysis", result.copyAnalysis),
        ("Campaign Outline", result.campaignOutline),
    ):
        print(f"=== {title} ===")
        print(text or "")
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())

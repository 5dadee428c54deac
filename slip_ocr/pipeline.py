"""End-to-end slip processing pipeline.

Sequences normalization, recognition, and the three text extractors.
Only normalization and recognition can fail; the extractors are total
over text and report a missing field as ``None``. The extractors run
independently of each other and of the classified institution.
"""

from dataclasses import dataclass

from slip_ocr.errors import ImageDecodeError, PipelineError, RecognitionError
from slip_ocr.extraction.amount import extract_amount
from slip_ocr.extraction.date import extract_date
from slip_ocr.extraction.institution import Institution, classify_institution
from slip_ocr.ocr.tesseract_engine import TesseractEngine
from slip_ocr.preprocessing.normalizer import ImageNormalizer
from slip_ocr.utils.config import AppConfig
from slip_ocr.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SlipResult:
    """Structured data extracted from one slip."""

    amount: str | None
    date: str | None
    institution: Institution
    raw_text: str

    def to_dict(self) -> dict[str, str | None]:
        """Return the caller-facing shape; an unknown issuer becomes ``None``."""
        return {
            "amount": self.amount,
            "date": self.date,
            "institution": (
                None
                if self.institution is Institution.UNKNOWN
                else self.institution.value
            ),
            "rawText": self.raw_text,
        }


@dataclass(frozen=True)
class PipelineOutcome:
    """Either a result or the error that stopped the pipeline."""

    result: SlipResult | None = None
    error: PipelineError | None = None

    @property
    def ok(self) -> bool:
        """Whether the run produced a result."""
        return self.error is None


def extract_fields(text: str) -> SlipResult:
    """Run the classifier and both extractors over recognized text."""
    institution = classify_institution(text)
    amount = extract_amount(text)
    date = extract_date(text)
    return SlipResult(amount=amount, date=date, institution=institution, raw_text=text)


class SlipPipeline:
    """Image bytes in, :class:`SlipResult` out.

    Args:
        normalizer: Image normalizer. Defaults to one with default settings.
        engine: Recognition adapter. Defaults to Tesseract with ``lao+eng``.
    """

    def __init__(
        self,
        normalizer: ImageNormalizer | None = None,
        engine: TesseractEngine | None = None,
    ) -> None:
        self.normalizer = normalizer or ImageNormalizer()
        self.engine = engine or TesseractEngine()

    @classmethod
    def from_config(cls, config: AppConfig) -> "SlipPipeline":
        """Build a pipeline from application configuration."""
        return cls(
            normalizer=ImageNormalizer(config.preprocessing),
            engine=TesseractEngine(
                tesseract_cmd=config.ocr.tesseract_cmd,
                lang=config.ocr.lang,
                psm=config.ocr.psm,
            ),
        )

    def run(self, raw: bytes) -> SlipResult:
        """Process one slip image.

        Args:
            raw: Encoded image bytes.

        Returns:
            The extracted fields and the recognized text.

        Raises:
            PipelineError: If normalization or recognition fails. The
                stage's own error is chained as the cause.
        """
        logger.info("Processing slip image (%d bytes)", len(raw))

        try:
            normalized = self.normalizer.normalize(raw)
        except ImageDecodeError as exc:
            raise PipelineError("normalize", exc) from exc

        try:
            text = self.engine.recognize(normalized)
        except RecognitionError as exc:
            raise PipelineError("recognize", exc) from exc

        result = extract_fields(text)
        logger.info(
            "Extracted institution=%s amount=%s date=%s",
            result.institution,
            result.amount,
            result.date,
        )
        return result

    def try_run(self, raw: bytes) -> PipelineOutcome:
        """Like :meth:`run`, but return a failure as a value instead of raising."""
        try:
            return PipelineOutcome(result=self.run(raw))
        except PipelineError as exc:
            logger.warning("Slip processing failed: %s", exc)
            return PipelineOutcome(error=exc)

from app.classification.classifier import TypeClassifier
from app.config.settings import Settings
from app.consistency.locks import KeyedLocks
from app.database.repositories.base import BaseDocumentRepository
from app.extraction.content import ContentExtractor
from app.extraction.facts import FactExtractor
from app.logging.logger import Log
from app.oracle.base import BaseOracle
from app.processor.exceptions import ProcessorError
from app.processor.pipeline import PipelineContext, PipelineStep
from app.processor.steps import (
    CheckFormatStep,
    ClassifyStep,
    ExtractContentStep,
    ExtractFactsStep,
    FetchContentStep,
    IntegrityGateStep,
    RecordStep,
    ValidateStep,
)
from app.storage.base import BaseContentFetcher
from app.validation.factory import IntegrityGateFactory, ValidatorFactory


class Processor:
    """Runs one submission through the validation pipeline.

    Pipeline: format -> fetch -> extract -> classify -> facts, then under the
    identity-key lock: validate -> integrity gate -> record.

    The first group stops as soon as a step sets a verdict; the guarded group
    always runs so every submission is recorded.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        guarded_steps: list[PipelineStep],
        locks: KeyedLocks | None = None,
    ) -> None:
        self._steps = steps
        self._guarded_steps = guarded_steps
        self._locks = locks if locks is not None else KeyedLocks()

    def process(self, context: PipelineContext) -> PipelineContext:
        Log.info(f"Processing {context.filename}", document_id=context.document_id)
        try:
            for step in self._steps:
                if context.decided:
                    break
                context = step.run(context)

            key = context.resolved_key()
            with self._locks.hold(key):
                for step in self._guarded_steps:
                    context = step.run(context)
        except ProcessorError as exc:
            Log.error(
                f"Processing {context.filename} failed: {exc}",
                document_id=context.document_id,
            )
            raise
        return context


def build_processor(
    settings: Settings,
    repository: BaseDocumentRepository,
    fetcher: BaseContentFetcher,
    oracle: BaseOracle,
    extractor: ContentExtractor,
    classifier: TypeClassifier,
) -> Processor:
    """Build a Processor with all required steps."""
    validators = ValidatorFactory.create(oracle)
    gate = IntegrityGateFactory.create(settings)
    return Processor(
        steps=[
            CheckFormatStep(extractor),
            FetchContentStep(fetcher, settings.max_upload_bytes),
            ExtractContentStep(extractor),
            ClassifyStep(classifier),
            ExtractFactsStep(FactExtractor()),
        ],
        guarded_steps=[
            ValidateStep(validators, repository),
            IntegrityGateStep(gate),
            RecordStep(repository),
        ],
    )

from app.consistency.requirements import describe_requirements
from app.documents.models import RejectionReason, Verdict
from app.validation.base import BaseDocumentValidator, ValidationSubject


class UnrecognizedValidator(BaseDocumentValidator):
    def validate(self, subject: ValidationSubject) -> Verdict:
        expected = describe_requirements(subject.category)
        return Verdict.invalid(
            "Document type not recognized. Please upload one of the following: "
            f"{expected}. Make sure the document title and content clearly "
            "indicate the document type.",
            RejectionReason.UNRECOGNIZED,
        )

"""Document routes - registers all document endpoints."""

from fastapi import APIRouter

from apps.documents.handlers import find_clauses, get_document, upload_document

router = APIRouter(prefix="/documents", tags=["Documents"])

# POST /documents/upload - Upload document
router.post("/upload")(upload_document)

# GET /documents/{doc_id} - Document summary
router.get("/{doc_id}")(get_document)

# POST /documents/{doc_id}/clauses - Clause search
router.post("/{doc_id}/clauses")(find_clauses)

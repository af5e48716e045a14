# capital_marketplace/routes/document_routes.py
"""Data room file routes"""
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import Response

from capital_marketplace.dependencies import get_document_service
from capital_marketplace.schemas import APIResponse, api_response
from capital_marketplace.services.document_service import DocumentService, serialize_document

router = APIRouter(tags=["Files"])


@router.post("/{company_id}", status_code=201)
async def upload_file(
    company_id: UUID,
    file: UploadFile = File(...),
    category: Optional[str] = Form(None),
    service: DocumentService = Depends(get_document_service),
) -> APIResponse:
    """Upload a document to the company's data room"""
    contents = await file.read()
    document = service.upload(
        company_id,
        file_name=file.filename,
        content_type=file.content_type,
        content=contents,
        category=category,
    )
    return api_response(serialize_document(document))


@router.get("/{company_id}")
async def list_files(
    company_id: UUID,
    category: Optional[str] = None,
    limit: int = Query(50, ge=1, le=100),
    offset: int = Query(0, ge=0),
    service: DocumentService = Depends(get_document_service),
) -> APIResponse:
    documents = service.list_documents(company_id, category=category, limit=limit, offset=offset)
    return api_response([serialize_document(d) for d in documents])


@router.get("/{company_id}/stats")
async def get_file_stats(
    company_id: UUID,
    service: DocumentService = Depends(get_document_service),
) -> APIResponse:
    return api_response(service.stats(company_id))


@router.post("/{company_id}/cleanup")
async def cleanup_orphaned_files(
    company_id: UUID,
    service: DocumentService = Depends(get_document_service),
) -> APIResponse:
    """Drop records of files that no longer exist on disk"""
    return api_response(service.cleanup_orphaned_files(company_id))


@router.get("/{company_id}/{file_id}/download")
async def download_file(
    company_id: UUID,
    file_id: UUID,
    service: DocumentService = Depends(get_document_service),
):
    document = service.get_document(company_id, file_id)
    content = service.read_content(document)
    return Response(
        content=content,
        media_type=document.mime_type,
        headers={"Content-Disposition": f'attachment; filename="{document.name}"'},
    )


@router.get("/{company_id}/{file_id}")
async def get_file(
    company_id: UUID,
    file_id: UUID,
    service: DocumentService = Depends(get_document_service),
) -> APIResponse:
    document = service.get_document(company_id, file_id)
    return api_response(serialize_document(document))


@router.delete("/{company_id}/{file_id}")
async def delete_file(
    company_id: UUID,
    file_id: UUID,
    service: DocumentService = Depends(get_document_service),
) -> APIResponse:
    service.delete_document(company_id, file_id)
    return api_response({"success": True})

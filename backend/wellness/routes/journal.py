from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from ..core.deps import current_db, current_student_id
from ..models.journal import JournalCreate, JournalPublic, JournalRepo

router = APIRouter()

@router.post("", response_model=JournalPublic, response_model_by_alias=False, summary="Nueva entrada del diario")
async def create_entry(payload: JournalCreate, db=Depends(current_db), student_id: str = Depends(current_student_id)):
    return await JournalRepo(db).create(student_id, payload)

@router.get("", response_model=list[JournalPublic], response_model_by_alias=False, summary="Mis entradas")
async def list_entries(
    q: Optional[str] = None,
    mood: Optional[str] = None,
    limit: int = Query(50, ge=1, le=100),
    db=Depends(current_db),
    student_id: str = Depends(current_student_id),
):
    return await JournalRepo(db).list(student_id, q=q, mood=mood, limit=limit)

@router.get("/{entry_id}", response_model=JournalPublic, response_model_by_alias=False, summary="Una entrada")
async def get_entry(entry_id: str, db=Depends(current_db), student_id: str = Depends(current_student_id)):
    doc = await JournalRepo(db).get(student_id, entry_id)
    if not doc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="journal_entry_not_found")
    return doc

@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Borrar entrada")
async def delete_entry(entry_id: str, db=Depends(current_db), student_id: str = Depends(current_student_id)):
    if not await JournalRepo(db).delete(student_id, entry_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="journal_entry_not_found")

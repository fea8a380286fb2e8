"""
books-api: the academic library catalogue.

Runs with service privileges, so no user token is required. Responses keep
the `{success, data, ...}` envelope.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from backend.db import Book, DbClient
from backend.dependencies import get_db_client
from backend.schemas import BookPayload

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/books")
def list_books(db: DbClient = Depends(get_db_client)):
    logger.info("Getting all books")
    books = [book.as_dict() for book in db.list_books()]
    return {"success": True, "data": books, "count": len(books)}


@router.get("/books/{book_id}")
def get_book(book_id: str, db: DbClient = Depends(get_db_client)):
    logger.info("Getting book with ID: %s", book_id)
    book = db.get_book(book_id)
    if not book:
        raise HTTPException(status_code=404, detail="Book not found")
    return {"success": True, "data": book.as_dict()}


@router.post("/books")
def create_book(payload: BookPayload, db: DbClient = Depends(get_db_client)):
    if not payload.title or not payload.author:
        raise HTTPException(status_code=400, detail="Title and author are required")
    book = db.create_book(Book(**payload.model_dump()))
    logger.info("Created book %s", book.id)
    return JSONResponse(
        status_code=201,
        content={
            "success": True,
            "data": book.as_dict(),
            "message": "Book created successfully",
        },
    )


@router.put("/books/{book_id}")
def update_book(
    book_id: str, payload: BookPayload, db: DbClient = Depends(get_db_client)
):
    logger.info("Updating book with ID: %s", book_id)
    fields = payload.model_dump(exclude_unset=True)
    # title and author are NOT NULL columns.
    for required in ("title", "author"):
        if required in fields and not fields[required]:
            raise HTTPException(status_code=400, detail="Title and author are required")
    book = db.update_book(book_id, fields)
    if not book:
        raise HTTPException(
            status_code=404, detail="Failed to update book or book not found"
        )
    return {
        "success": True,
        "data": book.as_dict(),
        "message": "Book updated successfully",
    }


@router.delete("/books/{book_id}")
def delete_book(book_id: str, db: DbClient = Depends(get_db_client)):
    logger.info("Deleting book with ID: %s", book_id)
    if not db.delete_book(book_id):
        raise HTTPException(
            status_code=404, detail="Failed to delete book or book not found"
        )
    return {"success": True, "message": "Book deleted successfully"}

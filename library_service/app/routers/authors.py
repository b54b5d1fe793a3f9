"""
library_service/app/routers/authors.py

Endpoints del recurso /api/authors.

Cada handler sigue el mismo flujo:
  validar -> traducir DTO a entidad (mapper) -> repositorio -> decidir resultado

- Validación fallida   -> 400 con los errores acumulados (warn, sin tocar la BD)
- Entidad inexistente  -> 404 (warn)
- Repositorio False    -> 500 con mensaje genérico (error con la causa real)
- Excepción inesperada -> 500 con mensaje genérico (error con mensaje y causa)
"""

from typing import List, Optional

from fastapi import APIRouter, Body, Depends

from app import models, schemas
from app.dependencies import get_author_repository, get_book_repository, get_logger, get_mapper
from app.logger import LoggerService
from app.mapper import Mapper
from app.repository import BookRepositoryBase, RepositoryBase
from app.responses import bad_request, created, internal_error, no_content, not_found
from app.validation import body_errors, update_errors

router = APIRouter(prefix="/api/authors", tags=["authors"])


# -------------------------------
# GET /api/authors
# -------------------------------
@router.get("", summary="Get all authors", response_model=List[schemas.AuthorDTO])
def get_authors(
    repository: RepositoryBase[models.Author] = Depends(get_author_repository),
    mapper: Mapper = Depends(get_mapper),
    logger: LoggerService = Depends(get_logger),
):
    """Lista todos los autores con sus libros. Una lista vacía también es 200."""
    try:
        logger.log_info("Getting authors.")
        authors = repository.find_all()
        response = mapper.map_many(authors, schemas.AuthorDTO)
        logger.log_info(f"Successfully got {len(response)} authors.")
        return response
    except Exception as ex:
        return internal_error(logger, ex)


# -------------------------------
# GET /api/authors/{author_id}
# -------------------------------
@router.get("/{author_id}", summary="Get an author by id", response_model=schemas.AuthorDTO)
def get_author(
    author_id: int,
    repository: RepositoryBase[models.Author] = Depends(get_author_repository),
    mapper: Mapper = Depends(get_mapper),
    logger: LoggerService = Depends(get_logger),
):
    try:
        logger.log_info(f"Getting author by id. Id: {author_id}")
        author = repository.find_by_id(author_id)
        if author is None:
            logger.log_warn(f"Author with id {author_id} was not found.")
            return not_found("Author not found")
        return mapper.map(author, schemas.AuthorDTO)
    except Exception as ex:
        return internal_error(logger, ex)


# -------------------------------
# GET /api/authors/{author_id}/books
# -------------------------------
@router.get("/{author_id}/books", summary="Get the books of an author", response_model=List[schemas.BookDTO])
def get_author_books(
    author_id: int,
    authors: RepositoryBase[models.Author] = Depends(get_author_repository),
    books: BookRepositoryBase = Depends(get_book_repository),
    mapper: Mapper = Depends(get_mapper),
    logger: LoggerService = Depends(get_logger),
):
    try:
        logger.log_info(f"Getting books of author {author_id}.")
        if not authors.exists(author_id):
            logger.log_warn(f"Author with id {author_id} was not found.")
            return not_found("Author not found")
        return mapper.map_many(books.find_by_author(author_id), schemas.BookDTO)
    except Exception as ex:
        return internal_error(logger, ex)


# -------------------------------
# POST /api/authors
# -------------------------------
@router.post("", status_code=201, summary="Create an author", response_model=schemas.AuthorDTO)
def create_author(
    author_dto: Optional[schemas.AuthorCreateDTO] = Body(default=None),
    repository: RepositoryBase[models.Author] = Depends(get_author_repository),
    mapper: Mapper = Depends(get_mapper),
    logger: LoggerService = Depends(get_logger),
):
    """
    Crea un autor.

    Body esperado:
    {
      "firstname": "Ada",
      "lastname": "Lovelace",
      "bio": "opcional"
    }
    """
    try:
        logger.log_info("Author submission attempted.")
        errors = body_errors(author_dto)
        if errors:
            logger.log_warn(f"Author submission rejected: {errors}")
            return bad_request(errors)

        author = mapper.map(author_dto, models.Author)
        if not repository.create(author):
            return internal_error(logger, "Author creation failed.")

        logger.log_info(f"Author {author.id} created.")
        return created(f"/api/authors/{author.id}", mapper.map(author, schemas.AuthorDTO))
    except Exception as ex:
        return internal_error(logger, ex)


# -------------------------------
# PUT /api/authors/{author_id}
# -------------------------------
@router.put("/{author_id}", status_code=204, summary="Update an author")
def update_author(
    author_id: int,
    author_dto: Optional[schemas.AuthorUpdateDTO] = Body(default=None),
    repository: RepositoryBase[models.Author] = Depends(get_author_repository),
    mapper: Mapper = Depends(get_mapper),
    logger: LoggerService = Depends(get_logger),
):
    """
    Actualiza un autor. El id del body es obligatorio y debe coincidir con el
    de la ruta; si no, 400 sin llegar al repositorio.
    """
    try:
        logger.log_info(f"Author update attempted. Id: {author_id}")
        errors = update_errors(author_id, author_dto)
        if errors:
            logger.log_warn(f"Author update rejected: {errors}")
            return bad_request(errors)

        author = mapper.map(author_dto, models.Author)
        if not repository.update(author):
            return internal_error(logger, f"Update of author {author_id} failed.")

        logger.log_info(f"Author {author_id} updated.")
        return no_content()
    except Exception as ex:
        return internal_error(logger, ex)


# -------------------------------
# DELETE /api/authors/{author_id}
# -------------------------------
@router.delete("/{author_id}", status_code=204, summary="Delete an author")
def delete_author(
    author_id: int,
    repository: RepositoryBase[models.Author] = Depends(get_author_repository),
    logger: LoggerService = Depends(get_logger),
):
    """Borra un autor y, en cascada, sus libros."""
    try:
        logger.log_info(f"Author delete attempted. Id: {author_id}")
        author = repository.find_by_id(author_id)
        if author is None:
            logger.log_warn(f"Author with id {author_id} was not found.")
            return not_found("Author not found")

        if not repository.delete(author):
            return internal_error(logger, f"Delete of author {author_id} failed.")

        logger.log_info(f"Author {author_id} deleted.")
        return no_content()
    except Exception as ex:
        return internal_error(logger, ex)

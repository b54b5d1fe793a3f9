from pydantic import BaseModel, Field, StringConstraints
from typing import Annotated, List, Optional

# Texto obligatorio: se recorta y no puede quedar vacío ("" o "   " -> 400)
NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class BookBase(BaseModel):
    title: NonEmptyStr
    year: Optional[int] = None
    isbn: Optional[str] = Field(default=None, max_length=20)
    summary: Optional[str] = None
    author_id: int

class BookCreateDTO(BookBase):
    pass

class BookUpdateDTO(BookBase):
    # Obligatorio para el handler: debe coincidir con el id de la ruta
    id: Optional[int] = None

class BookDTO(BookBase):
    id: int


class AuthorBase(BaseModel):
    firstname: NonEmptyStr
    lastname: NonEmptyStr
    bio: Optional[str] = None

class AuthorCreateDTO(AuthorBase):
    # Sin id: lo asigna la base de datos (un id enviado por el cliente se ignora)
    pass

class AuthorUpdateDTO(AuthorBase):
    id: Optional[int] = None

class AuthorDTO(AuthorBase):
    id: int
    # Proyección de solo lectura de los libros del autor
    books: List[BookDTO] = []

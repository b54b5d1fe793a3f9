from app import models, schemas
from app.mapper import Mapper

# Reglas registradas (cada una vale en ambos sentidos)
mapper = Mapper()
mapper.create_map(models.Book, schemas.BookDTO)
mapper.create_map(models.Book, schemas.BookCreateDTO)
mapper.create_map(models.Book, schemas.BookUpdateDTO)
mapper.create_map(models.Author, schemas.AuthorDTO)
mapper.create_map(models.Author, schemas.AuthorCreateDTO)
mapper.create_map(models.Author, schemas.AuthorUpdateDTO)

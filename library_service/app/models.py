from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from .database import Base


class Author(Base):
    __tablename__ = "authors"

    id = Column(Integer, primary_key=True, index=True)
    firstname = Column(String, nullable=False)
    lastname = Column(String, nullable=False)
    bio = Column(Text)

    # El autor es dueño del ciclo de vida de sus libros: al borrarlo se borran
    books = relationship(
        "Book",
        back_populates="author",
        cascade="all, delete-orphan",
        order_by="Book.id",
    )


class Book(Base):
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    year = Column(Integer)
    isbn = Column(String(20))
    summary = Column(Text)
    author_id = Column(Integer, ForeignKey("authors.id"), nullable=False, index=True)

    # Referencia inversa; el libro no es dueño del autor
    author = relationship("Author", back_populates="books")

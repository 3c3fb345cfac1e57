"""
Tests for the image repository against a real (SQLite) database.
"""
import asyncio
import uuid

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import create_async_engine

from mediahub.database import create_session_factory
from mediahub.errors import NotFound, PersistenceError
from mediahub.models.image import Image
from mediahub.models.user import User
from mediahub.repositories.image_repository import ImageRepository, NewImage
from mediahub.schemas.image import ImageInfo

from factories import make_png


def new_image(filename: str = "0123456789abcdef.png", data: bytes = None) -> NewImage:
    data = data if data is not None else make_png(100, 50)
    return NewImage(
        height=50,
        width=100,
        mime="image/png",
        filename=filename,
        url=f"http://testserver/api/v1/images/{filename}",
        image=data,
    )


class TestSave:
    
    @pytest.mark.asyncio
    async def test_save_assigns_id_and_returns_record(self, repository: ImageRepository, test_user: User):
        pending = new_image()
        
        image = await repository.save(pending, test_user.id)
        
        assert isinstance(image.id, uuid.UUID)
        assert image.owner_id == test_user.id
        assert image.filename == pending.filename
        assert image.url == pending.url
        assert (image.width, image.height) == (100, 50)
        assert image.size == len(pending.image)
        assert image.image == pending.image
    
    @pytest.mark.asyncio
    async def test_duplicate_filename_raises(self, repository: ImageRepository, test_user: User, session_factory):
        await repository.save(new_image("dup.png"), test_user.id)
        
        with pytest.raises(PersistenceError) as exc_info:
            await repository.save(new_image("dup.png"), test_user.id)
        
        assert exc_info.value.details["filename"] == "dup.png"
        
        async with session_factory() as session:
            count = await session.scalar(select(func.count()).select_from(Image))
        assert count == 1
    
    @pytest.mark.asyncio
    async def test_connectivity_failure_raises(self, tmp_path, test_user: User):
        """A database that cannot be opened surfaces as PersistenceError."""
        engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'nope.db'}")
        repository = ImageRepository(create_session_factory(engine))
        
        try:
            with pytest.raises(PersistenceError):
                await repository.save(new_image(), test_user.id)
        finally:
            await engine.dispose()
    
    @pytest.mark.asyncio
    async def test_concurrent_saves_do_not_interfere(self, repository: ImageRepository, test_user: User):
        first = new_image("aaaaaaaaaaaaaaaa.png", make_png(10, 20))
        second = new_image("bbbbbbbbbbbbbbbb.png", make_png(30, 40))
        
        saved = await asyncio.gather(
            repository.save(first, test_user.id),
            repository.save(second, test_user.id),
        )
        
        assert saved[0].id != saved[1].id
        assert saved[0].filename == first.filename
        assert saved[1].filename == second.filename
        assert saved[0].image == first.image
        assert saved[1].image == second.image


class TestDownload:
    
    @pytest.mark.asyncio
    async def test_download_after_save(self, repository: ImageRepository, test_user: User):
        saved = await repository.save(new_image(), test_user.id)
        
        image = await repository.download(saved.filename)
        
        assert image.id == saved.id
        assert image.mime == "image/png"
        assert image.size == saved.size
        assert image.image == saved.image
    
    @pytest.mark.asyncio
    async def test_download_unknown_filename(self, repository: ImageRepository):
        with pytest.raises(NotFound):
            await repository.download("ffffffffffffffff.png")
    
    @pytest.mark.asyncio
    async def test_download_is_case_sensitive(self, repository: ImageRepository, test_user: User):
        await repository.save(new_image("abcdef0123456789.png"), test_user.id)
        
        with pytest.raises(NotFound):
            await repository.download("ABCDEF0123456789.png")


class TestGetInfo:
    
    @pytest.mark.asyncio
    async def test_get_info_projection(self, repository: ImageRepository, test_user: User):
        saved = await repository.save(new_image(), test_user.id)
        
        info = await repository.get_info(saved.id)
        
        assert isinstance(info, ImageInfo)
        assert info.model_dump() == {
            "height": 50,
            "width": 100,
            "mime": "image/png",
            "filename": saved.filename,
            "size": saved.size,
            "owner_id": test_user.id,
        }
    
    @pytest.mark.asyncio
    async def test_get_info_unknown_id(self, repository: ImageRepository):
        with pytest.raises(NotFound):
            await repository.get_info(uuid.uuid4())

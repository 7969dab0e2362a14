"""Persistence layer for cut file metadata."""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy.orm import Session

from app.domain.entities import ManagedFile
from app.infrastructure.models import ManagedFileModel
from app.utils import ensure_app_timezone


class FileRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def list_by_cut(self, cut_id: int) -> Sequence[ManagedFile]:
        query = (
            self.session.query(ManagedFileModel)
            .filter(ManagedFileModel.cut_id == cut_id)
            .order_by(ManagedFileModel.created_at.desc(), ManagedFileModel.id.desc())
        )
        return [self._to_entity(model) for model in query.all()]

    def get(self, file_id: int) -> ManagedFile | None:
        model = self.session.get(ManagedFileModel, file_id)
        return self._to_entity(model) if model else None

    def get_by_share_token(self, share_token: str) -> ManagedFile | None:
        model = (
            self.session.query(ManagedFileModel)
            .filter(ManagedFileModel.share_token == share_token)
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, managed_file: ManagedFile) -> ManagedFile:
        model = ManagedFileModel(
            cut_id=managed_file.cut_id,
            uploaded_by_id=managed_file.uploaded_by_id,
            kind=managed_file.kind,
            name=managed_file.name,
            filename=managed_file.filename,
            original_name=managed_file.original_name,
            path=managed_file.path,
            file_size=managed_file.file_size,
            mime_type=managed_file.mime_type,
        )
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def rename(self, file_id: int, name: str | None) -> ManagedFile | None:
        model = self.session.get(ManagedFileModel, file_id)
        if model is None:
            return None
        model.name = name
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def set_sharing(self, file_id: int, share_token: str | None) -> ManagedFile | None:
        """Publish the file under ``share_token``, or make it private with ``None``."""

        model = self.session.get(ManagedFileModel, file_id)
        if model is None:
            return None
        model.share_token = share_token
        model.is_public = share_token is not None
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def delete(self, file_id: int) -> bool:
        deleted = (
            self.session.query(ManagedFileModel)
            .filter(ManagedFileModel.id == file_id)
            .delete(synchronize_session=False)
        )
        self.session.commit()
        return bool(deleted)

    @staticmethod
    def _to_entity(model: ManagedFileModel) -> ManagedFile:
        uploader = model.uploaded_by
        return ManagedFile(
            id=model.id,
            cut_id=model.cut_id,
            kind=model.kind,
            filename=model.filename,
            original_name=model.original_name,
            path=model.path,
            file_size=model.file_size,
            mime_type=model.mime_type,
            name=model.name,
            uploaded_by_id=model.uploaded_by_id,
            uploaded_by_name=uploader.name if uploader is not None else None,
            is_public=bool(model.is_public),
            share_token=model.share_token,
            created_at=ensure_app_timezone(model.created_at),
            updated_at=ensure_app_timezone(model.updated_at),
        )


__all__ = ["FileRepository"]

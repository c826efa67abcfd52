"""
Tests for utils.storage: bucketed uploads and public URLs.
"""

import os
import re

import pytest

from utils.errors import StorageError
from utils.storage import (
    CVS,
    PROJECT_IMAGES,
    ObjectStorage,
    allowed_file,
    build_object_path,
)


@pytest.fixture
def storage(tmp_path):
    return ObjectStorage(str(tmp_path), '/storage', max_workers=3)


def stored_file(storage, url):
    bucket_and_path = url[len('/storage/'):]
    return os.path.join(storage.root, *bucket_and_path.split('/'))


class TestObjectPaths:
    def test_path_shape(self):
        path = build_object_path('owner-1', 'Photo.PNG')

        assert re.fullmatch(r'owner-1/\d+_[0-9a-f]{8}\.png', path)

    def test_paths_do_not_collide(self):
        paths = {build_object_path('owner', 'a.png') for _ in range(50)}

        assert len(paths) == 50

    def test_non_ascii_name_keeps_extension(self):
        assert build_object_path('owner', '简历.pdf').endswith('.pdf')

    def test_unsafe_extension_is_dropped(self):
        assert re.fullmatch(r'owner/\d+_[0-9a-f]{8}', build_object_path('owner', 'a.p/df'))

    def test_allowed_file_per_bucket(self):
        assert allowed_file('cv.pdf', CVS)
        assert not allowed_file('cv.pdf', PROJECT_IMAGES)
        assert not allowed_file('noext', PROJECT_IMAGES)


class TestObjectStorage:
    """Tests for local object storage."""

    def test_upload_returns_public_url(self, storage, file_storage):
        url = storage.upload(PROJECT_IMAGES, 'owner', file_storage('shot.png', b'png-bytes'))

        assert url.startswith('/storage/project-images/owner/')
        assert url.endswith('.png')
        with open(stored_file(storage, url), 'rb') as f:
            assert f.read() == b'png-bytes'

    def test_upload_non_ascii_filename(self, storage, file_storage):
        url = storage.upload(CVS, 'owner', file_storage('Резюме.pdf', b'%PDF'))

        assert url.startswith('/storage/cvs/owner/')
        assert url.endswith('.pdf')
        assert os.path.exists(stored_file(storage, url))

    def test_disallowed_type(self, storage, file_storage):
        with pytest.raises(StorageError):
            storage.upload(PROJECT_IMAGES, 'owner', file_storage('script.exe'))

    def test_unknown_bucket(self, storage, file_storage):
        with pytest.raises(StorageError):
            storage.upload('secrets', 'owner', file_storage('a.png'))

    def test_empty_file_field(self, storage, file_storage):
        with pytest.raises(StorageError):
            storage.upload(PROJECT_IMAGES, 'owner', file_storage(''))

    def test_upload_many_keeps_input_order(self, storage, file_storage):
        files = [file_storage(f'{i}.png', f'content-{i}'.encode()) for i in range(5)]

        urls = storage.upload_many(PROJECT_IMAGES, 'owner', files)

        assert len(urls) == 5
        for i, url in enumerate(urls):
            with open(stored_file(storage, url), 'rb') as f:
                assert f.read() == f'content-{i}'.encode()

    def test_upload_many_skips_empty_fields(self, storage, file_storage):
        assert storage.upload_many(PROJECT_IMAGES, 'owner', [file_storage('')]) == []
        assert storage.upload_many(PROJECT_IMAGES, 'owner', []) == []

    def test_upload_many_rejects_batch_with_bad_file(self, storage, file_storage, tmp_path):
        files = [file_storage('ok.png'), file_storage('bad.txt')]

        with pytest.raises(StorageError):
            storage.upload_many(PROJECT_IMAGES, 'owner', files)
        assert not (tmp_path / 'project-images').exists()

    def test_public_url(self, storage):
        assert storage.get_public_url(CVS, 'u/1.pdf') == '/storage/cvs/u/1.pdf'

"""
Storage Module - Bucketed object storage for uploaded assets

Objects are written under ``<root>/<bucket>/<owner id>/<timestamp>_<token>.<ext>``
and served back through the portfolio blueprint at ``<public url>/<bucket>/<path>``.
"""

import os
import time
import uuid
from concurrent.futures import ThreadPoolExecutor
from flask import current_app
from werkzeug.utils import secure_filename
from .errors import StorageError


PROFILE_IMAGES = 'profile-images'
CVS = 'cvs'
PROJECT_IMAGES = 'project-images'
SKILL_LOGOS = 'skill-logos'

IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp', 'svg'}
DOCUMENT_EXTENSIONS = {'pdf', 'doc', 'docx'}

BUCKETS = {
    PROFILE_IMAGES: IMAGE_EXTENSIONS,
    CVS: DOCUMENT_EXTENSIONS,
    PROJECT_IMAGES: IMAGE_EXTENSIONS,
    SKILL_LOGOS: IMAGE_EXTENSIONS,
}


def file_extension(filename):
    if not filename or '.' not in filename:
        return ''
    return filename.rsplit('.', 1)[1].lower()


def allowed_file(filename, bucket):
    """Check if file extension is allowed in the bucket"""
    return file_extension(filename) in BUCKETS.get(bucket, set())


def has_file(file):
    return bool(file and file.filename)


def build_object_path(owner_id, filename):
    """Collision-resistant object path keyed by owner and upload time"""
    timestamp = int(time.time() * 1000)
    token = uuid.uuid4().hex[:8]
    ext = file_extension(filename)
    if not (ext.isascii() and ext.isalnum()):
        ext = ''
    name = f"{timestamp}_{token}.{ext}" if ext else f"{timestamp}_{token}"
    return f"{secure_filename(str(owner_id))}/{name}"


class ObjectStorage:
    """Local-disk object storage with public URL resolution"""

    def __init__(self, root, public_url='/storage', max_workers=4):
        self.root = os.path.abspath(root)
        self.public_url = public_url.rstrip('/')
        self.max_workers = max(1, int(max_workers))

    def _check_bucket(self, bucket):
        if bucket not in BUCKETS:
            raise StorageError(f"Unknown bucket: {bucket}")

    def bucket_path(self, bucket):
        self._check_bucket(bucket)
        return os.path.join(self.root, bucket)

    def get_public_url(self, bucket, object_path):
        self._check_bucket(bucket)
        return f"{self.public_url}/{bucket}/{object_path}"

    def upload(self, bucket, owner_id, file):
        """
        Store one file and return its public URL

        Args:
            bucket (str): target bucket name
            owner_id (str): id of the uploading user, used as path prefix
            file: werkzeug FileStorage (anything with ``filename`` and ``save``)

        Returns:
            str: publicly retrievable URL of the stored object
        """
        self._check_bucket(bucket)
        if not has_file(file):
            raise StorageError("No file selected")
        if not allowed_file(file.filename, bucket):
            raise StorageError(f"File type not allowed in {bucket}: {file.filename}")

        object_path = build_object_path(owner_id, file.filename)
        target = os.path.join(self.root, bucket, *object_path.split('/'))
        try:
            os.makedirs(os.path.dirname(target), exist_ok=True)
            file.save(target)
        except OSError as e:
            raise StorageError(f"Could not store {file.filename}: {str(e)}") from e
        return self.get_public_url(bucket, object_path)

    def upload_many(self, bucket, owner_id, files):
        """Upload files concurrently; URLs come back in the same order as ``files``"""
        files = [f for f in files if has_file(f)]
        if not files:
            return []
        for f in files:
            if not allowed_file(f.filename, bucket):
                raise StorageError(f"File type not allowed in {bucket}: {f.filename}")

        workers = min(self.max_workers, len(files))
        with ThreadPoolExecutor(max_workers=workers) as executor:
            return list(executor.map(lambda f: self.upload(bucket, owner_id, f), files))


def init_storage(app):
    storage = ObjectStorage(
        app.config.get('STORAGE_ROOT', 'storage'),
        app.config.get('STORAGE_PUBLIC_URL', '/storage'),
        app.config.get('UPLOAD_WORKERS', 4),
    )
    app.extensions['object_storage'] = storage
    return storage


def get_storage():
    return current_app.extensions['object_storage']


__all__ = [
    'PROFILE_IMAGES',
    'CVS',
    'PROJECT_IMAGES',
    'SKILL_LOGOS',
    'BUCKETS',
    'allowed_file',
    'has_file',
    'build_object_path',
    'ObjectStorage',
    'init_storage',
    'get_storage',
]

"""
Infrastructure Adapter: Receipt Storage
Implements IStorage for AWS S3 with pre-signed URLs, plus a local filesystem fallback
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from application.ports.storage import IStorage

logger = logging.getLogger(__name__)


class S3Storage(IStorage):
    """AWS S3 storage adapter with pre-signed URLs"""

    def __init__(
        self,
        bucket_name: str,
        aws_access_key: Optional[str] = None,
        aws_secret_key: Optional[str] = None,
        region: str = "ap-southeast-1",
        url_expiration: int = 3600,
        endpoint_url: Optional[str] = None
    ):
        """Initialize S3 client"""

        self.bucket_name = bucket_name
        self.region = region
        self.url_expiration = url_expiration

        client_kwargs = {"region_name": region}

        if aws_access_key and aws_secret_key:
            client_kwargs["aws_access_key_id"] = aws_access_key
            client_kwargs["aws_secret_access_key"] = aws_secret_key

        # LocalStack / MinIO
        if endpoint_url:
            client_kwargs["endpoint_url"] = endpoint_url

        self.s3_client = boto3.client('s3', **client_kwargs)

    def upload_bytes(
        self,
        data: bytes,
        remote_key: str,
        content_type: str = "application/octet-stream",
        metadata: Optional[Dict[str, str]] = None
    ) -> str:
        """Upload bytes to S3 and return pre-signed URL"""

        extra_args = {"ContentType": content_type}
        if metadata:
            extra_args["Metadata"] = metadata

        try:
            self.s3_client.put_object(
                Bucket=self.bucket_name,
                Key=remote_key,
                Body=data,
                **extra_args
            )

            url = self.s3_client.generate_presigned_url(
                'get_object',
                Params={
                    'Bucket': self.bucket_name,
                    'Key': remote_key
                },
                ExpiresIn=self.url_expiration
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"[S3] Upload of {remote_key} failed: {e}")
            raise Exception(f"S3 upload failed: {e}") from e

        logger.info(f"[S3] Uploaded {remote_key} ({len(data)} bytes)")
        return url


class LocalStorage(IStorage):
    """Local filesystem storage adapter (fallback when S3 unavailable)"""

    def __init__(self, base_path: str = "data/storage"):
        """Initialize local storage"""

        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def upload_bytes(
        self,
        data: bytes,
        remote_key: str,
        content_type: str = "application/octet-stream",
        metadata: Optional[Dict[str, str]] = None
    ) -> str:
        """Write bytes under base_path and return a file:// URL"""

        dest_path = self.base_path / remote_key
        dest_path.parent.mkdir(parents=True, exist_ok=True)
        dest_path.write_bytes(data)

        if metadata:
            meta_path = dest_path.with_suffix(dest_path.suffix + '.meta.json')
            with open(meta_path, 'w', encoding='utf-8') as f:
                json.dump({"content_type": content_type, **metadata}, f, indent=2, ensure_ascii=False)

        logger.info(f"[LOCAL_STORAGE] Saved {dest_path}")
        return f"file://{dest_path.absolute()}"

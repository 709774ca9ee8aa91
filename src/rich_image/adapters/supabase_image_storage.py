"""Supabase Storage bucket for generated images."""

from dataclasses import dataclass

from supabase import Client

from rich_image.services.generation import ImageStorage


@dataclass
class SupabaseImageStorage(ImageStorage):
    """Supabase implementation for generated image persistence."""

    client: Client
    bucket: str

    def upload(self, name: str, content: bytes, content_type: str) -> None:
        """Upload an object, refusing to overwrite an existing one."""
        self.client.storage.from_(self.bucket).upload(
            path=name,
            file=content,
            file_options={
                "content-type": content_type,
                "cache-control": "3600",
                "upsert": "false",
            },
        )

    def public_url(self, name: str) -> str:
        """Return the public URL for an uploaded object."""
        url = self.client.storage.from_(self.bucket).get_public_url(name)
        if not url:
            raise RuntimeError(f"Failed to resolve public URL for {name}")
        return url

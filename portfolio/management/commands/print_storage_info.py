from django.conf import settings
from django.core.files.storage import storages
from django.core.files.uploadedfile import SimpleUploadedFile
from django.core.management.base import BaseCommand

from portfolio.storage_backends import SupabaseMediaStorage
from portfolio.uploads import delete_image, store_image

# 1x1 transparent GIF
PROBE_IMAGE = (
    b"GIF89a\x01\x00\x01\x00\x80\x00\x00\x00\x00\x00\xff\xff\xff!\xf9\x04\x01\x00\x00\x00\x00"
    b",\x00\x00\x00\x00\x01\x00\x01\x00\x00\x02\x02D\x01\x00;"
)


class Command(BaseCommand):
    help = "Print effective storage config and run a tiny upload test through the image pipeline"

    def add_arguments(self, parser):
        parser.add_argument("--no-upload", action="store_true", help="Only print the configuration.")

    def handle(self, *args, **options):
        self.stdout.write("== Storage configuration ==")
        self.stdout.write(f"DEBUG: {settings.DEBUG}")
        self.stdout.write(f"MEDIA_URL: {settings.MEDIA_URL}")
        self.stdout.write(f"STORAGES.default: {settings.STORAGES.get('default')}")
        self.stdout.write(f"default_storage class: {type(storages['default']).__name__}")

        if settings.SUPABASE_PROJECT_URL or settings.SUPABASE_URL:
            sb = SupabaseMediaStorage()
            self.stdout.write(f"Supabase bucket: {sb.bucket}")
            self.stdout.write(f"Supabase public base: {sb.public_base}")
        else:
            self.stdout.write("Supabase: not configured")

        if options["no_upload"]:
            return

        self.stdout.write("\n== Upload test ==")
        probe = SimpleUploadedFile("probe.gif", PROBE_IMAGE, content_type="image/gif")
        stored = store_image(probe, folder="check")
        self.stdout.write(f"Saved as: {stored.path}")
        self.stdout.write(f"Public URL: {stored.url}")
        delete_image(stored.path)
        self.stdout.write(self.style.SUCCESS("Done."))

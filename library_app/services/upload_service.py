import os
import time

from flask import current_app

from library_app.errors import InvalidUploadError


class UploadService:
    @staticmethod
    def upload_folder() -> str:
        return current_app.config.get("UPLOAD_FOLDER") or os.path.join(current_app.static_folder, "images")

    @staticmethod
    def has_file(file_storage) -> bool:
        return bool(file_storage and file_storage.filename)

    @staticmethod
    def image_extension(filename: str) -> str:
        # only the extension survives; the stored name is generated
        ext = os.path.splitext(filename or "")[1].lower()
        if not ext or ext.lstrip(".") not in current_app.config["ALLOWED_IMAGE_EXTENSIONS"]:
            raise InvalidUploadError(f"Unsupported image type: {ext or '(none)'}")
        return ext

    @staticmethod
    def save_image(file_storage) -> str:
        """
        Writes the upload as <epoch-ms><ext> under UPLOAD_FOLDER.
        return: generated filename (not the full path)
        """
        ext = UploadService.image_extension(file_storage.filename)

        folder = UploadService.upload_folder()
        os.makedirs(folder, exist_ok=True)

        while True:
            filename = f"{int(time.time() * 1000)}{ext}"
            try:
                # exclusive create: a concurrent upload in the same millisecond gets FileExistsError
                with open(os.path.join(folder, filename), "xb") as f:
                    file_storage.save(f)
                break
            except FileExistsError:
                time.sleep(0.001)

        current_app.logger.info(f"[books] saved upload {filename}")
        return filename

    @staticmethod
    def discard(filename: str) -> None:
        path = os.path.join(UploadService.upload_folder(), filename)
        if os.path.exists(path):
            os.remove(path)
            current_app.logger.info(f"[books] removed orphan upload {filename}")

# splice_api.py — HTTP API around the splice sheet builder
from __future__ import annotations

import logging
from typing import Any, Dict, Tuple

from flask import Flask, jsonify, request, send_file
from werkzeug.exceptions import RequestEntityTooLarge

import splice_settings
from fiber_colors import fiber_standards
from input_sheet import config_from_payload, config_from_upload, load_payload
from sample_data import sample_config
from splice_errors import InputParseError, OutputError, SpliceSheetError, ValidationError
from splice_export import resolve_output_file, timestamped_filename, write_output
from splice_sheet import SpliceConfig, build_splice_table, table_summary

logger = logging.getLogger(__name__)


def _generate(config: SpliceConfig, prefix: str, message: str) -> Dict[str, Any]:
    table = build_splice_table(config)
    filename = timestamped_filename(prefix)
    write_output(table, filename)
    return {
        "success": True,
        "message": message,
        "filename": filename,
        "rowCount": len(table) - 1,  # excluding header
        "downloadUrl": f"/download/{filename}",
        "preview": table[:splice_settings.PREVIEW_ROWS],
        "summary": table_summary(config, table),
    }


def _failure(message: str, exc: Exception, status: int) -> Tuple[Any, int]:
    return jsonify({"success": False, "message": message, "error": str(exc)}), status


def create_app() -> Flask:
    app = Flask(__name__)
    app.config["MAX_CONTENT_LENGTH"] = splice_settings.MAX_UPLOAD_MB * 1024 * 1024

    @app.get("/health")
    def health():
        return jsonify({"status": "OK", "message": "Splice Sheet Generator API is running"})

    @app.get("/fiber-standards")
    def standards():
        return jsonify(fiber_standards())

    @app.post("/generate-splice-sheet")
    def generate_from_upload():
        try:
            f = request.files.get("inputFile")
            if f is not None and f.filename:
                config = config_from_upload(f.read(), f.filename)
                logger.info("Generating splice sheet from upload %s", f.filename)
            else:
                config = sample_config()
                logger.info("No upload; generating splice sheet from sample data")
            return jsonify(_generate(config, "splice_sheet", "Splice sheet generated successfully"))
        except (InputParseError, ValidationError) as e:
            logger.warning("Rejected upload: %s", e)
            return _failure("Error generating splice sheet", e, 400)
        except SpliceSheetError as e:
            logger.exception("Error generating splice sheet")
            return _failure("Error generating splice sheet", e, 500)

    @app.post("/generate-custom-splice-sheet")
    def generate_custom():
        try:
            config = config_from_payload(load_payload(request.get_data()))
            return jsonify(_generate(config, "custom_splice_sheet", "Custom splice sheet generated successfully"))
        except (InputParseError, ValidationError) as e:
            logger.warning("Rejected custom request: %s", e)
            return _failure("Error generating custom splice sheet", e, 400)
        except SpliceSheetError as e:
            logger.exception("Error generating custom splice sheet")
            return _failure("Error generating custom splice sheet", e, 500)

    @app.get("/download/<path:filename>")
    def download(filename: str):
        try:
            path = resolve_output_file(filename)
        except (FileNotFoundError, OutputError):
            return jsonify({"error": "File not found"}), 404
        return send_file(path, mimetype=splice_settings.XLSX_MIME,
                         as_attachment=True, download_name=path.name)

    @app.errorhandler(RequestEntityTooLarge)
    def too_large(e):
        return jsonify({"success": False, "message": "Upload rejected", "error": "File too large"}), 400

    @app.errorhandler(Exception)
    def unexpected(e):
        # HTTP errors (404/405 ...) keep their status code
        code = getattr(e, "code", None)
        if isinstance(code, int):
            return jsonify({"success": False, "message": getattr(e, "name", "HTTP error"),
                            "error": getattr(e, "description", str(e))}), code
        logger.exception("Unhandled error")
        return _failure("Internal server error", e, 500)

    return app


app = create_app()

if __name__ == "__main__":
    splice_settings.setup_logging()
    app.run(host=splice_settings.API_HOST, port=splice_settings.API_PORT)

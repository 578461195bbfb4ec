from pdfcrop.messages import message_for, supported_locales


def test_original_locale_messages():
    assert message_for("invalid_file_type", "zh-TW") == "請上傳一個 PDF 檔案。"
    assert message_for("corrupt_document", "zh-TW") == "讀取 PDF 失敗。檔案可能已損壞。"
    assert message_for("extraction_failed", "zh-TW") == "裁切 PDF 時發生錯誤。"


def test_unknown_locale_falls_back_to_english():
    assert message_for("invalid_file_type", "fr") == "Please upload a PDF file."


def test_unknown_key_uses_generic_message():
    assert message_for("no_such_key", "en") == "An unexpected error occurred."


def test_supported_locales():
    assert supported_locales() == ["en", "zh-TW"]

import unittest

from cdpgen import naming


class TestNaming(unittest.TestCase):
    def test_snake_splits_camel_case_and_acronyms(self) -> None:
        self.assertEqual(naming.snake("getFrameTree"), "get_frame_tree")
        self.assertEqual(naming.snake("getHTML"), "get_html")
        self.assertEqual(naming.snake("IndexedDB"), "indexed_db")
        self.assertEqual(naming.snake("DOMStorage"), "dom_storage")
        self.assertEqual(naming.snake("scriptToEvaluateOnLoad"), "script_to_evaluate_on_load")

    def test_attribute_name_escapes_keywords_and_reserved_names(self) -> None:
        self.assertEqual(naming.attribute_name("type"), "type")
        self.assertEqual(naming.attribute_name("import"), "import_")
        self.assertEqual(naming.attribute_name("from"), "from_")
        self.assertEqual(naming.attribute_name("self"), "self_")
        self.assertEqual(naming.attribute_name("cls"), "cls_")

    def test_safe_ident_handles_leading_digits_and_symbols(self) -> None:
        self.assertEqual(naming.safe_ident("3d"), "_3d")
        self.assertEqual(naming.safe_ident("a-b.c"), "a_b_c")
        self.assertEqual(naming.safe_ident("---"), "value")

    def test_module_name_avoids_generated_module_names(self) -> None:
        self.assertEqual(naming.module_name("Page"), "page")
        self.assertEqual(naming.module_name("DOM"), "dom")
        self.assertEqual(naming.module_name("Events"), "events_")
        self.assertEqual(naming.module_name("Commands"), "commands_")

    def test_class_names(self) -> None:
        self.assertEqual(naming.class_name("frameId"), "FrameId")
        self.assertEqual(naming.class_name("DOM"), "DOM")
        self.assertEqual(naming.domain_class("Client"), "Client_")

    def test_payload_names(self) -> None:
        self.assertEqual(naming.member_name("Page", "reload"), "PageReload")
        self.assertEqual(naming.args_name("Page", "reload"), "PageReloadArgs")
        self.assertEqual(naming.reply_name("Page", "navigate"), "PageNavigateReply")
        self.assertEqual(naming.event_client_name("Page", "loadEventFired"), "PageLoadEventFiredClient")
        self.assertEqual(naming.args_constructor_name("DOM", "getDocument"), "new_dom_get_document_args")

    def test_enum_member_names(self) -> None:
        self.assertEqual(naming.enum_member_names(["log", "warning"]), ["LOG", "WARNING"])
        self.assertEqual(naming.enum_member_names(["XHR", "Xhr"]), ["XHR", "XHR_2"])
        self.assertEqual(naming.enum_member_names(["2d", "notSet"]), ["VALUE_2D", "NOT_SET_"])
        self.assertEqual(naming.enum_member_names(["-"]), ["VALUE"])


if __name__ == "__main__":
    unittest.main()

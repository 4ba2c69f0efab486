"""
Unit tests for gitsim.__main__ module
"""
import unittest
from unittest.mock import patch


class TestMainEntryPoint(unittest.TestCase):
    """Test the main entry point functionality"""

    def test_main_module_imports(self):
        """Test that main module can be imported"""
        import gitsim.__main__
        self.assertTrue(hasattr(gitsim.__main__, 'main'))

    def test_package_exports(self):
        """Test the public API re-exports"""
        import gitsim
        session = gitsim.RepositorySession()
        session.run("git init")
        self.assertTrue(session.snapshot.initialized)
        self.assertTrue(gitsim.build_status_panel(session.snapshot).initialized)
        self.assertEqual(gitsim.get_topic("merge").name, "git merge")

    @patch('gitsim.cli.cli')
    def test_main_calls_cli(self, mock_cli):
        """Test main() runs the click group"""
        from gitsim.cli import main
        main()
        mock_cli.assert_called_once_with()


if __name__ == '__main__':
    unittest.main()

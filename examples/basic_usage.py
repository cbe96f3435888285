"""
Basic usage examples for guia-harness.
"""
from guia_harness.browser.driver_factory import BrowserUnavailableError, create_driver
from guia_harness.browser.geolocation import MockGeolocation
from guia_harness.config_manager import ConsoleConfig, DocsConfig, load_config
from guia_harness.console.capture import ConsoleCapture
from guia_harness.docs.links import LinkChecker
from guia_harness.docs.references import ReferenceChecker
from guia_harness.docs.terminology import TerminologyChecker
from guia_harness.server.mock_geolocation import MockGeolocationServer


def example_1_documentation_checks():
    """Example 1: Run the three documentation checks over a repository."""
    print("=" * 60)
    print("Example 1: Documentation Checks")
    print("=" * 60)

    config = DocsConfig(root=".")

    for checker in (LinkChecker(config), ReferenceChecker(config), TerminologyChecker(config)):
        report = checker.run()
        print(f"\n{report.checker}:")
        print(f"  Files scanned: {report.files_scanned}")
        print(f"  Items checked: {report.total}")
        print(f"  Problems: {report.broken}")
        for finding in report.findings[:3]:
            print(f"  {finding.format()}")
    print()


def example_2_console_capture(driver, base_url):
    """Example 2: Capture console output while loading the application."""
    print("=" * 60)
    print("Example 2: Console Capture")
    print("=" * 60)

    console = ConsoleCapture(driver, ConsoleConfig(max_entries=200))
    driver.get(base_url)
    console.inject_listener()

    driver.execute_script("console.warn('Example warning from Selenium');")
    entry = console.wait_for_log(r"Example warning", timeout=2.0)
    print(f"\nFound: {entry.format() if entry else 'nothing'}")

    summary = console.get_log_summary()
    print(f"Summary: {summary.to_dict()} (total {summary.total})")
    print()


def example_3_mock_geolocation(driver, base_url):
    """Example 3: Pin the application to Milho Verde, Serro, MG."""
    print("=" * 60)
    print("Example 3: Mock Geolocation")
    print("=" * 60)

    driver.get(f"{base_url}/index.html")
    with MockGeolocation(driver) as result:
        if result.success:
            print(f"\nMock provider installed at {result.coordinates}")
        else:
            print(f"\nSetup failed: {result.error}")
    print()


if __name__ == "__main__":
    example_1_documentation_checks()

    config = load_config()
    with MockGeolocationServer(config.mock_server.model_copy(update={"port": 0})) as server:
        try:
            driver = create_driver(config.browser, geolocation_url=server.url)
        except BrowserUnavailableError as e:
            print(f"Skipping browser examples: {e}")
        else:
            try:
                example_2_console_capture(driver, config.browser.base_url)
                example_3_mock_geolocation(driver, config.browser.base_url)
            finally:
                driver.quit()

"""Basic usage example for insightlog."""

from opentelemetry.sdk.trace.export import ConsoleSpanExporter

from insightlog import (
    Config,
    Culture,
    InMemorySink,
    OpenTelemetrySink,
    TelemetryClient,
)


class InvoiceService:
    """Stand-in for an application component."""


def console_example():
    """Send logs and feature usage to OpenTelemetry's console exporter."""
    config = Config(service_name="billing", batch_export=False)
    sink = OpenTelemetrySink.from_config(config, exporter=ConsoleSpanExporter())
    client = TelemetryClient(sink=sink, config=config)

    log = client.get_logger(InvoiceService)
    log.info("Issuing {0} invoices", 3)

    with client.track_feature("Issue invoices") as feature:
        for number in range(3):
            with feature.sub_feature(f"Invoice {number}"):
                log.debug("Rendering invoice {0}", number)

        try:
            raise ConnectionError("mail server unreachable")
        except ConnectionError as e:
            feature.on_exception(e)
            log.error_exception("Could not send invoices", e)

    client.flush()


def inspection_example():
    """Capture records in memory and print them."""
    sink = InMemorySink()
    client = TelemetryClient(sink=sink)
    german = Culture("de-DE", decimal_separator=",", group_separator=".")

    log = client.get_logger("reports")
    log.info("Revenue: {0:,.2f} EUR", 1234567.891, provider=german)

    with client.track_feature("Quarterly report") as report:
        report.sub_feature("Charts").dispose()

    for record in sink.records:
        print(record)


if __name__ == "__main__":
    console_example()
    print("-" * 50)
    inspection_example()

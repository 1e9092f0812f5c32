"""Showcase examples for the infradiagram README."""

import os

from infradiagram import (
    CloudArchDiagram,
    Connection,
    ConnectionStyle,
    DataflowDiagram,
    Item,
    Layer,
    NetworkDiagram,
    Provider,
    Service,
    Stage,
    Zone,
    convert_diagram,
    render_to_svg,
)


def network_example():
    """Security zones with a dashed side channel from the edge to the data tier."""
    spec = NetworkDiagram(
        zones=(
            Zone(label="Internet", color="#64748B", items=(Item("Users", "Browser / CLI"),)),
            Zone(label="Public Subnet", color="#F59E0B", items=(
                Item("AWS WAF", "Rate limiting / payload inspection"),
                Item("ALB", "Load Balancer"),
            )),
            Zone(label="Private Subnet", color="#3B82F6", items=(
                Item("LLM Gateway", "LiteLLM"),
                Item("Guardrails", "Injection detection"),
                Item("Log Shipper", "Vector"),
            )),
            Zone(label="Data", color="#10B981", items=(
                Item("Secrets Manager"),
                Item("S3", "Audit logs"),
            )),
        ),
        connections=(
            Connection(source="Internet", target="Public Subnet", label="HTTPS"),
            Connection(source="Public Subnet", target="Private Subnet", label="filtered"),
            Connection(source="Public Subnet", target="Data", label="access logs",
                       style=ConnectionStyle.DASHED),
        ),
    )
    render_to_svg(convert_diagram(spec), "docs/network")


def dataflow_example():
    """Prompt processing pipeline."""
    spec = DataflowDiagram(stages=(
        Stage(label="Ingress", color="#64748B", items=("Request", "Auth")),
        Stage(label="Inspect", color="#EF4444", items=("PII masking", "Prompt injection check", "Policy")),
        Stage(label="Model", color="#8B5CF6", items=("Routing", "Completion")),
        Stage(label="Egress", color="#10B981", items=("Output filter",)),
    ))
    render_to_svg(convert_diagram(spec), "docs/dataflow")


def cloud_arch_example():
    """Layered GCP deployment; the data layer falls back to the provider color."""
    spec = CloudArchDiagram(
        provider=Provider.GCP,
        layers=(
            Layer(label="Edge", color="#F59E0B", services=(
                Service("Cloud Armor", "WAF and DDoS protection"),
                Service("Load Balancer"),
            )),
            Layer(label="Compute", color="#3B82F6", services=(
                Service("Cloud Run", "Gateway"),
                Service("Vertex AI", "Gemini endpoints"),
                Service("Cloud Functions"),
            )),
            Layer(label="Data", services=(
                Service("Secret Manager"),
                Service("BigQuery", "Audit analytics"),
            )),
        ),
    )
    render_to_svg(convert_diagram(spec), "docs/cloud_arch")


def main():
    os.makedirs("docs", exist_ok=True)
    network_example()
    dataflow_example()
    cloud_arch_example()
    print("Diagrams saved to docs/")


if __name__ == "__main__":
    main()

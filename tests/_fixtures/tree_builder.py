"""Helper utilities for constructing temporary source trees in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from springviz.models import SourceTree
from springviz.repo_scanner import RepoScanner

JAVA_ROOT = "src/main/java/com/example/demo"

DEMO_PROJECT = {
    f"{JAVA_ROOT}/DemoApplication.java": """
        package com.example.demo;

        import org.springframework.boot.autoconfigure.SpringBootApplication;

        @SpringBootApplication
        public class DemoApplication {
            public static void main(String[] args) {
                SpringApplication.run(DemoApplication.class, args);
            }
        }
    """,
    f"{JAVA_ROOT}/DaoConfig.java": """
        package com.example.demo;

        import org.springframework.context.annotation.ComponentScan;
        import org.springframework.context.annotation.Configuration;

        @Configuration
        @ComponentScan({ "com.example.demo.repository" })
        public class DaoConfig {
        }
    """,
    f"{JAVA_ROOT}/ServiceConfig.java": """
        package com.example.demo;

        import org.springframework.context.annotation.Bean;
        import org.springframework.context.annotation.ComponentScan;
        import org.springframework.context.annotation.Configuration;
        import org.springframework.context.annotation.Import;

        @Configuration
        @Import(DaoConfig.class)
        @ComponentScan({ "com.example.demo.service" })
        public class ServiceConfig {
            @Bean
            public MyBean myBean() {
                return new MyBean();
            }
        }
    """,
    f"{JAVA_ROOT}/repository/UserRepository.java": """
        package com.example.demo.repository;

        import org.springframework.stereotype.Repository;

        @Repository
        public class UserRepository {
        }
    """,
    f"{JAVA_ROOT}/service/BarService.java": """
        package com.example.demo.service;

        import org.springframework.beans.factory.annotation.Autowired;
        import org.springframework.context.annotation.Bean;
        import org.springframework.stereotype.Service;

        import com.example.demo.MyBean;

        @Service
        public class BarService {
            @Autowired
            MyBean myBean;

            @Bean
            public ConstructorInjected constructorInjected(ConstructorInjected constructorInjected) {
                return new ConstructorInjected();
            }
        }
    """,
    f"{JAVA_ROOT}/service/ConstructorInjection.java": """
        package com.example.demo.service;

        import org.springframework.beans.factory.annotation.Autowired;
        import org.springframework.stereotype.Service;

        @Service
        public class ConstructorInjection {

            @SuppressWarnings("unused")
            private final ConstructorInjected constructorInjected;

            // Redundant @Autowired-annotations
            @Autowired
            public ConstructorInjection(@Autowired ConstructorInjected constructorInjected) {
                this.constructorInjected = constructorInjected;
            }
        }
    """,
    f"{JAVA_ROOT}/util/Strings.java": """
        package com.example.demo.util;

        public final class Strings {
            private Strings() {}
        }
    """,
}


class TreeBuilder:
    """Utility for writing files into a throwaway source tree and rescanning it."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "project"
        self.root.mkdir()
        self._scanner = RepoScanner()

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries into the tree."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_bytes(self, relative: str, data: bytes) -> None:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)

    def write_demo(self) -> None:
        """Write the sample Spring project used across tests."""
        self.write(DEMO_PROJECT)

    def scan(self, package_filter: str = "") -> SourceTree:
        """Return a fresh view of the tree contents."""
        return self._scanner.scan(str(self.root), package_filter)

    def path(self) -> Path:
        """Return the tree root path."""
        return self.root


__all__ = ["DEMO_PROJECT", "JAVA_ROOT", "TreeBuilder"]

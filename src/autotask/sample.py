"""Sample catalog used for development, demos, and `autotask init --sample`."""

from __future__ import annotations

from autotask.core.relationships import RelationType, TaskRelation
from autotask.core.tasks import Task

DEPENDS_ON = RelationType.DEPENDS_ON
PARALLEL = RelationType.PARALLEL
CONDITION = RelationType.CONDITION

SAMPLE_TASKS: tuple[Task, ...] = (
    Task(
        id="1",
        name="Fix login page styling",
        description=(
            "The login form renders incorrectly on mobile devices. Adjust the responsive "
            "layout, especially the spacing between inputs and buttons on small screens."
        ),
        image="node:18-alpine",
        prerequisites=(),
        script=(
            "#!/bin/bash\n"
            'echo "Fixing login page styles..."\n'
            "cd /src/components/login\n"
            "npm run fix:style\n"
            "npm run test:visual"
        ),
    ),
    Task(
        id="2",
        name="Implement user registration",
        description=(
            "Add a registration page with email verification and password strength "
            "checks. Requires integrating the mail delivery service."
        ),
        image="node:18-alpine",
        prerequisites=("1",),
        script=(
            "#!/bin/bash\n"
            'echo "Starting registration feature..."\n'
            "cd /src/auth\n"
            "npm install nodemailer\n"
            "npm run dev"
        ),
    ),
    Task(
        id="3",
        name="Optimize database queries",
        description=(
            "The user list query is too slow. Add indexes and tune the SQL statements."
        ),
        image="mysql:8.0",
        prerequisites=(),
        script=(
            "#!/bin/bash\n"
            'echo "Optimizing queries..."\n'
            "mysql -u root -p < optimize_queries.sql\n"
            'echo "Indexes added"'
        ),
    ),
    Task(
        id="4",
        name="Update project documentation",
        description="Complete the API reference and update the deployment guide.",
        image="node:18-alpine",
        prerequisites=("3",),
        script=(
            "#!/bin/bash\n"
            'echo "Building docs..."\n'
            "npm run docs:build\n"
            "scp -r docs/dist server:/var/www/docs/"
        ),
    ),
    Task(
        id="5",
        name="Integrate payment gateway",
        description=(
            "Connect the payment providers and implement order payment, including "
            "payment callbacks and order status synchronisation."
        ),
        image="node:18-alpine",
        prerequisites=("2", "3"),
        script=(
            "#!/bin/bash\n"
            'echo "Configuring payment gateway..."\n'
            "npm install @alipay/sdk @wechat/pay\n"
            "node scripts/setup-payment.js"
        ),
    ),
    Task(
        id="6",
        name="Add unit tests",
        description="Write unit tests for the core business modules, targeting 80% coverage.",
        image="node:18-alpine",
        prerequisites=("5",),
        script=(
            "#!/bin/bash\n"
            'echo "Running unit tests..."\n'
            "npm run test:unit -- --coverage\n"
            "if [ $? -eq 0 ]; then\n"
            '  echo "Tests passed"\n'
            "else\n"
            '  echo "Tests failed"\n'
            "  exit 1\n"
            "fi"
        ),
    ),
    Task(
        id="7",
        name="Fix memory leak",
        description=(
            "Users report the system slows down after running for a long time; "
            "profiling found a memory leak that needs fixing."
        ),
        image="node:18-alpine",
        prerequisites=(),
        script=(
            "#!/bin/bash\n"
            'echo "Profiling memory..."\n'
            "node --inspect scripts/memory-profile.js\n"
            "npm run test:memory"
        ),
    ),
    Task(
        id="8",
        name="Design new home page layout",
        description=(
            "Redesign the home page per product requirements, adding a data overview "
            "panel and quick action shortcuts."
        ),
        image="nginx:alpine",
        prerequisites=("1",),
        script=(
            "#!/bin/bash\n"
            'echo "Building home page..."\n'
            "npm run build:home\n"
            'echo "Deploying to preview..."\n'
            "./deploy-preview.sh home"
        ),
    ),
    Task(
        id="9",
        name="Implement file upload",
        description=(
            "Support uploading images, documents and other formats, with file type "
            "checks and chunked upload for large files."
        ),
        image="node:18-alpine",
        prerequisites=("8",),
        script=(
            "#!/bin/bash\n"
            'echo "Configuring file upload..."\n'
            "mkdir -p /uploads/{images,documents}\n"
            "npm install multer sharp\n"
            "node scripts/setup-upload.js"
        ),
    ),
    Task(
        id="10",
        name="Configure CI/CD pipeline",
        description="Set up GitHub Actions for automated testing and deployment.",
        image="docker:latest",
        prerequisites=("6", "7"),
        script=(
            "#!/bin/bash\n"
            'echo "Deploying to production..."\n'
            "docker build -t app:latest .\n"
            "docker push registry/app:latest\n"
            "kubectl rollout restart deployment/app"
        ),
    ),
    Task(
        id="11",
        name="Speed up first page load",
        description="Reduce first paint time with code splitting and lazy loading.",
        image="node:18-alpine",
        prerequisites=("8",),
        script=(
            "#!/bin/bash\n"
            'echo "Analysing bundle size..."\n'
            "npm run analyze\n"
            "npm run build:prod\n"
            'echo "Done"'
        ),
    ),
    Task(
        id="12",
        name="Add data export",
        description="Export report data to Excel and PDF.",
        image="node:18-alpine",
        prerequisites=("9",),
        script=(
            "#!/bin/bash\n"
            'echo "Installing export dependencies..."\n'
            "npm install xlsx pdfkit\n"
            "npm run test:export\n"
            "npm run build"
        ),
    ),
)

SAMPLE_RELATIONS: tuple[TaskRelation, ...] = (
    TaskRelation("2", "1", DEPENDS_ON),
    TaskRelation("4", "3", DEPENDS_ON),
    TaskRelation("5", "2", DEPENDS_ON),
    TaskRelation("5", "3", DEPENDS_ON),
    # Unit tests follow the payment gateway, and only once it exits cleanly.
    TaskRelation("6", "5", DEPENDS_ON),
    TaskRelation("6", "5", CONDITION, condition="exit_code == 0"),
    TaskRelation("8", "1", DEPENDS_ON),
    # Upload work can proceed alongside the home page layout.
    TaskRelation("9", "8", DEPENDS_ON),
    TaskRelation("9", "8", PARALLEL),
    TaskRelation("10", "6", DEPENDS_ON),
    TaskRelation("10", "7", DEPENDS_ON),
    TaskRelation("11", "8", DEPENDS_ON),
    TaskRelation("11", "8", PARALLEL),
    TaskRelation("12", "9", DEPENDS_ON),
    TaskRelation("12", "9", CONDITION, condition="upload_size > 0"),
)

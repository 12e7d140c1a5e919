from copier_templates_extensions import ContextHook


class ContextUpdater(ContextHook):
    def hook(self, context):
        name = context["project_name"]
        additions = {
            "jni_library": f"lib{name}_jni.so",
            "jar_base_name": f"{name}-jni",
        }
        context.update(additions)
        return additions

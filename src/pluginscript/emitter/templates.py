"""
Java boilerplate added to the main class on demand.

The persistent-data handler, the fetch/parseJson helpers and the
description stub are fixed code; only the data file name and plugin folder
vary, substituted with string.Template since the Java text is full of braces.
"""

from string import Template

from pluginscript.emitter.ir import JavaMethod
from pluginscript.models.definitions import PluginDescriptor

BASE_IMPORTS = (
    "org.bukkit.command.Command",
    "org.bukkit.command.CommandExecutor",
    "org.bukkit.command.CommandSender",
    "org.bukkit.plugin.java.JavaPlugin",
    "org.bukkit.event.EventHandler",
    "org.bukkit.event.Listener",
    "org.bukkit.event.player.*",
    "org.bukkit.event.block.*",
    "org.bukkit.event.entity.*",
    "org.bukkit.Server",
    "org.bukkit.entity.Player",
    "java.util.ArrayList",
    "java.util.List",
)

COMMAND_CLASS_IMPORTS = (
    "org.bukkit.command.Command",
    "org.bukkit.command.CommandExecutor",
    "org.bukkit.command.CommandSender",
)

JSON_IMPORTS = (
    "org.json.simple.JSONArray",
    "org.json.simple.JSONObject",
    "org.json.simple.parser.JSONParser",
    "org.json.simple.parser.ParseException",
)

FILE_IMPORTS = (
    "java.nio.file.Files",
    "java.nio.file.Path",
    "java.nio.file.Paths",
    "java.io.File",
    "java.io.FileReader",
    "java.io.FileWriter",
    "java.io.IOException",
)

FETCH_IMPORTS = (
    "java.net.http.HttpClient",
    "java.net.http.HttpRequest",
    "java.net.http.HttpResponse",
    "java.net.URI",
)

DATA_HANDLER_TEMPLATE = Template(
    """
    private static final DataHandler data = new DataHandler();

    public static class DataHandler {
        private static final String DATA_FILE = "$data_file";
        private static JSONObject jsonObject = new JSONObject();

        public DataHandler() {
            loadData();
        }

        public void set(String key, Object value) {
            jsonObject.put(key, value);
            saveData();
        }

        public Object get(String key) {
            return jsonObject.get(key);
        }

        public String getString(String key) {
            Object val = jsonObject.get(key);
            return val == null ? null : val.toString();
        }

        @SuppressWarnings("unchecked")
        public void setArray(String key, List<String> list) {
            JSONArray array = new JSONArray();
            array.addAll(list);
            jsonObject.put(key, array);
            saveData();
        }

        @SuppressWarnings("unchecked")
        public List<String> getArray(String key) {
            Object val = jsonObject.get(key);
            if (val instanceof JSONArray arr) {
                List<String> result = new ArrayList<>();
                for (Object o : arr) {
                    result.add(o.toString());
                }
                return result;
            }
            return new ArrayList<>();
        }

        private void loadData() {
            File folder = new File("plugins", "$plugin_name");
            folder.mkdirs();

            File file = new File(folder, DATA_FILE);
            if (!file.exists()) {
                jsonObject = new JSONObject();
                saveData();
                return;
            }
            try {
                String content = Files.readString(file.toPath());
                JSONParser parser = new JSONParser();
                jsonObject = (JSONObject) parser.parse(content);
            } catch (IOException | ParseException e) {
                e.printStackTrace();
                jsonObject = new JSONObject();
            }
        }

        private void saveData() {
            File folder = new File("plugins", "$plugin_name");
            folder.mkdirs();

            File file = new File(folder, DATA_FILE);
            try {
                Files.writeString(file.toPath(), jsonObject.toJSONString());
            } catch (IOException e) {
                e.printStackTrace();
            }
        }
    }
    """
)

FETCH_BODY = """\
try {
    HttpClient client = HttpClient.newHttpClient();
    HttpRequest request = HttpRequest.newBuilder()
            .uri(URI.create(url))
            .build();
    HttpResponse<String> response = client.send(request, HttpResponse.BodyHandlers.ofString());
    return response.body();
} catch (Exception e) {
    e.printStackTrace();
    return "";
}"""

PARSE_JSON_BODY = """\
try {
    JSONParser parser = new JSONParser();
    Object obj = parser.parse(jsonText);
    if (obj instanceof JSONObject jsonObj) {
        return jsonObj;
    }
    return new JSONObject();
} catch (Exception e) {
    e.printStackTrace();
    return new JSONObject();
}"""


def data_handler_block(descriptor: PluginDescriptor) -> str:
    """Static `data` field plus the nested DataHandler class."""
    return DATA_HANDLER_TEMPLATE.substitute(
        data_file=descriptor.data_file, plugin_name=descriptor.name
    )


def description_method() -> JavaMethod:
    # description("...") calls outside command bodies are kept; make them no-ops.
    return JavaMethod(signature="public void description(String msg)")


def fetch_method() -> JavaMethod:
    return JavaMethod(signature="public static String fetch(String url)", body=FETCH_BODY)


def parse_json_method() -> JavaMethod:
    return JavaMethod(
        signature="public static JSONObject parseJson(String jsonText)",
        body=PARSE_JSON_BODY,
    )
